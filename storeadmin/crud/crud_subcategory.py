# storeadmin/crud/crud_subcategory.py

from sqlalchemy.orm import Session

from .base import CRUDBase
from .. import models, schemas

class CRUDSubcategory(CRUDBase[models.Subcategory, schemas.SubcategoryCreate, schemas.SubcategoryUpdate]):
    def get_by_category(self, db: Session, *, category_id: int) -> list[models.Subcategory]:
        return (
            db.query(self.model)
            .filter(self.model.category_id == category_id)
            .order_by(self.model.id)
            .all()
        )

    def create_in_category(
        self, db: Session, *, obj_in: schemas.SubcategoryCreate, category_id: int
    ) -> models.Subcategory:
        db_obj = self.model(**obj_in.model_dump(), category_id=category_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def has_products(self, db: Session, *, subcategory_id: int) -> bool:
        query = db.query(models.Product.id).filter(models.Product.subcategory_id == subcategory_id)
        return db.query(query.exists()).scalar()

subcategory = CRUDSubcategory(models.Subcategory)
