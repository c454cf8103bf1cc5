# storeadmin/crud/crud_category.py

from sqlalchemy.orm import Session

from .base import CRUDBase
from .. import models, schemas

class CRUDCategory(CRUDBase[models.Category, schemas.CategoryCreate, schemas.CategoryUpdate]):
    def get_by_name(self, db: Session, *, name: str) -> models.Category | None:
        return db.query(self.model).filter(self.model.name == name).first()

    def search(self, db: Session, *, name: str, limit: int = 20) -> list[models.Category]:
        """Busca categorias cujo nome contém o termo (sem diferenciar maiúsculas)."""
        return (
            db.query(self.model)
            .filter(self.model.name.ilike(f"%{name}%"))
            .order_by(self.model.name)
            .limit(limit)
            .all()
        )

    def has_subcategories(self, db: Session, *, category_id: int) -> bool:
        query = db.query(models.Subcategory.id).filter(models.Subcategory.category_id == category_id)
        return db.query(query.exists()).scalar()

category = CRUDCategory(models.Category)
