# storeadmin/crud/crud_display.py

from typing import Any

from sqlalchemy.orm import Session, selectinload

from .base import CRUDBase, ModelType, CreateSchemaType, UpdateSchemaType

class CRUDDisplay(CRUDBase[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Operações comuns às vitrines (banners e seções da home), que guardam
    uma fonte de produtos e os vínculos ordenados com produtos.
    """
    def get(self, db: Session, id: Any) -> ModelType | None:
        return (
            db.query(self.model)
            .options(selectinload(self.model.product_links))
            .filter(self.model.id == id)
            .first()
        )

    def add(self, db: Session, *, db_obj: ModelType) -> ModelType:
        """Adiciona à sessão e faz flush para obter o id. Não faz commit."""
        db.add(db_obj)
        db.flush()
        return db_obj

    def is_referenced(
        self,
        db: Session,
        *,
        category_id: int | None = None,
        subcategory_id: int | None = None,
        deal_id: int | None = None,
    ) -> bool:
        """Indica se alguma vitrine usa a categoria, subcategoria ou oferta como fonte."""
        query = db.query(self.model.id)
        if category_id is not None:
            query = query.filter(self.model.selected_category_id == category_id)
        elif subcategory_id is not None:
            query = query.filter(self.model.selected_subcategory_id == subcategory_id)
        elif deal_id is not None:
            query = query.filter(self.model.selected_deal_id == deal_id)
        else:
            return False
        return db.query(query.exists()).scalar()
