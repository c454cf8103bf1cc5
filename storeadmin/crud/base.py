# storeadmin/crud/base.py

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy.orm import Session
from ..database import Base

# Tipos genéricos para o Modelo SQLAlchemy e os Schemas Pydantic
ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)

class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Classe base para operações CRUD com tipos genéricos para
    um modelo SQLAlchemy, um schema de criação e um schema de atualização.

    Os métodos `create`, `update` e `remove` fazem commit. Os serviços que
    precisam de uma transação maior usam `add`/`apply` e controlam o commit.
    """
    def __init__(self, model: Type[ModelType]):
        """
        :param model: A classe do modelo SQLAlchemy (ex: models.Category)
        """
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        """Busca um único objeto pelo seu ID."""
        return db.query(self.model).filter(self.model.id == id).first()

    def get_multi(
        self, db: Session, *, skip: int = 0, limit: int = 100
    ) -> List[ModelType]:
        """Busca múltiplos objetos com paginação."""
        return db.query(self.model).order_by(self.model.id).offset(skip).limit(limit).all()

    def exists(self, db: Session, *, exclude_id: Optional[int] = None, **filters: Any) -> bool:
        """Verifica se existe uma linha com os filtros dados (ex: name="X")."""
        query = db.query(self.model.id).filter_by(**filters)
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        return db.query(query.exists()).scalar()

    def create(self, db: Session, *, obj_in: CreateSchemaType) -> ModelType:
        """Cria um novo objeto no banco."""
        db_obj = self.model(**obj_in.model_dump())
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def apply(
        self,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """Copia os campos enviados para o objeto. Não faz commit."""
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            # exclude_unset=True garante que apenas os campos enviados sejam atualizados
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """Atualiza um objeto existente no banco."""
        self.apply(db_obj=db_obj, obj_in=obj_in)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, *, id: int) -> Optional[ModelType]:
        """Remove um objeto do banco pelo seu ID."""
        obj = db.get(self.model, id)
        if obj is None:
            return None
        db.delete(obj)
        db.commit()
        return obj
