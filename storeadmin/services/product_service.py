# storeadmin/services/product_service.py

import logging

from sqlalchemy.orm import Session

from .. import models, schemas, crud
from .errors import ConflictError, NotFoundError
from .pricing_engine import PricingEngine

logger = logging.getLogger(__name__)

# Campos que alteram o preço final; mudar qualquer um deles exige recalcular
PRICE_FIELDS = ("base_price", "discount", "discount_type", "deal_id")

class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.pricing_engine = PricingEngine(db)

    def get(self, product_id: int) -> models.Product:
        product = crud.product.get(self.db, product_id)
        if product is None:
            raise NotFoundError(f"Product with id {product_id} not found")
        return product

    def _get_subcategory(self, subcategory_id: int, category_id: int | None = None) -> models.Subcategory:
        subcategory = crud.subcategory.get(self.db, subcategory_id)
        if subcategory is None:
            raise NotFoundError(f"Subcategory with id {subcategory_id} not found")
        if category_id is not None and subcategory.category_id != category_id:
            raise NotFoundError(
                f"Subcategory {subcategory_id} does not exist or does not belong to category {category_id}"
            )
        return subcategory

    def _get_deal(self, deal_id: int | None) -> models.Deal | None:
        if deal_id is None:
            return None
        deal = crud.deal.get(self.db, deal_id)
        if deal is None:
            raise NotFoundError(f"Deal with id {deal_id} not found")
        return deal

    def create_product(self, *, product_in: schemas.ProductCreate) -> models.Product:
        # --- FASE 1: VALIDAÇÕES ---
        self._get_subcategory(product_in.subcategory_id, product_in.category_id)
        deal = self._get_deal(product_in.deal_id)

        product = models.Product(**product_in.model_dump(exclude={"category_id"}))
        # Preço negativo aborta aqui, antes de qualquer escrita
        self.pricing_engine.price_product(product=product, deal=deal)

        # --- FASE 2: PERSISTÊNCIA ---
        try:
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        except Exception:
            self.db.rollback()
            raise
        logger.info("Product %s created with final price %s", product.id, product.final_price)
        return product

    def update_product(self, *, product_id: int, product_in: schemas.ProductUpdate) -> models.Product:
        product = self.get(product_id)
        update_data = product_in.model_dump(exclude_unset=True)

        if "subcategory_id" in update_data:
            self._get_subcategory(update_data["subcategory_id"])
        deal = self._get_deal(update_data["deal_id"]) if update_data.get("deal_id") is not None else None

        reprice = any(
            field in update_data and update_data[field] != getattr(product, field)
            for field in PRICE_FIELDS
        )

        try:
            crud.product.apply(db_obj=product, obj_in=update_data)
            if "deal_id" in update_data:
                product.deal = deal
            if reprice:
                self.pricing_engine.price_product(product=product, deal=deal if product.deal_id else None)
            self.db.commit()
            self.db.refresh(product)
        except Exception:
            self.db.rollback()
            raise
        logger.info("Product %s updated (repriced=%s)", product.id, reprice)
        return product

    def delete_product(self, *, product_id: int) -> None:
        product = self.get(product_id)
        if crud.product.has_orders(self.db, product_id=product_id):
            raise ConflictError(f"Product {product_id} has orders and cannot be deleted")
        # Remove também os vínculos com banners e seções da home
        self.db.delete(product)
        self.db.commit()
        logger.info("Product %s deleted", product_id)

    def list_products(
        self, *, subcategory_id: int | None = None, deal_id: int | None = None, skip: int = 0, limit: int = 100
    ) -> list[models.Product]:
        return crud.product.get_filtered(
            self.db, subcategory_id=subcategory_id, deal_id=deal_id, skip=skip, limit=limit
        )
