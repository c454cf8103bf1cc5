# storeadmin/crud/crud_promo.py

from sqlalchemy.orm import Session

from .base import CRUDBase
from .. import models, schemas

class CRUDPromo(CRUDBase[models.Promo, schemas.PromoCreate, schemas.PromoCreate]):
    def get_by_code(self, db: Session, *, promo_code: str) -> models.Promo | None:
        return db.query(self.model).filter(self.model.promo_code == promo_code).first()

promo = CRUDPromo(models.Promo)
