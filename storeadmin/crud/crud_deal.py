# storeadmin/crud/crud_deal.py

from sqlalchemy import func
from sqlalchemy.orm import Session

from .base import CRUDBase
from .. import models, schemas

class CRUDDeal(CRUDBase[models.Deal, schemas.DealCreate, schemas.DealUpdate]):
    def get_multi_with_counts(
        self, db: Session, *, status: models.DealStatus | None = None
    ) -> list[tuple[models.Deal, int]]:
        """
        Lista as ofertas junto com a quantidade de produtos vinculados a cada uma.
        Uma única query com LEFT JOIN + GROUP BY evita o problema N+1.
        """
        query = (
            db.query(self.model, func.count(models.Product.id))
            .outerjoin(models.Product, models.Product.deal_id == self.model.id)
            .group_by(self.model.id)
            .order_by(self.model.id)
        )
        if status is not None:
            query = query.filter(self.model.status == status)
        return query.all()

deal = CRUDDeal(models.Deal)
