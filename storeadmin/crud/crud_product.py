# storeadmin/crud/crud_product.py

from sqlalchemy.orm import Session

from .base import CRUDBase
from .. import models, schemas

class CRUDProduct(CRUDBase[models.Product, schemas.ProductCreate, schemas.ProductUpdate]):
    def get_by_ids(self, db: Session, *, ids: list[int]) -> dict[int, models.Product]:
        """
        Busca vários produtos numa única query (IN) e devolve um dicionário id -> produto.
        Ids repetidos são consultados uma vez só.
        """
        unique_ids = set(ids)
        if not unique_ids:
            return {}
        rows = db.query(self.model).filter(self.model.id.in_(unique_ids)).all()
        return {product.id: product for product in rows}

    def get_filtered(
        self,
        db: Session,
        *,
        subcategory_id: int | None = None,
        deal_id: int | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[models.Product]:
        query = db.query(self.model)
        if subcategory_id is not None:
            query = query.filter(self.model.subcategory_id == subcategory_id)
        if deal_id is not None:
            query = query.filter(self.model.deal_id == deal_id)
        return query.order_by(self.model.id).offset(skip).limit(limit).all()

    def get_by_deal(self, db: Session, *, deal_id: int) -> list[models.Product]:
        return db.query(self.model).filter(self.model.deal_id == deal_id).order_by(self.model.id).all()

    def get_for_update(self, db: Session, *, product_id: int) -> models.Product | None:
        """Busca um produto aplicando um lock pessimista na linha para evitar race conditions."""
        return db.query(self.model).filter(self.model.id == product_id).with_for_update().first()

    def decrease_stock(self, db: Session, *, product: models.Product, quantity: int) -> models.Product:
        """Diminui o estoque de um produto. Não faz commit."""
        product.stock -= quantity
        if product.stock == 0:
            product.status = models.InventoryStatus.OUT_OF_STOCK
        db.add(product)
        return product

    def has_orders(self, db: Session, *, product_id: int) -> bool:
        query = db.query(models.OrderItem.id).filter(models.OrderItem.product_id == product_id)
        return db.query(query.exists()).scalar()

    def displayable(self, db: Session):
        """Query base dos produtos que podem aparecer numa vitrine."""
        return db.query(self.model).filter(self.model.status.in_(models.DISPLAYABLE_STATUSES))

product = CRUDProduct(models.Product)
