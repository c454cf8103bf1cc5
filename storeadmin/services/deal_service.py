# storeadmin/services/deal_service.py

import logging

from sqlalchemy.orm import Session

from .. import models, schemas, crud
from .errors import ConflictError, NotFoundError
from .pricing_engine import PricingEngine

logger = logging.getLogger(__name__)

class DealService:
    def __init__(self, db: Session):
        self.db = db
        self.pricing_engine = PricingEngine(db)

    def get(self, deal_id: int) -> models.Deal:
        deal = crud.deal.get(self.db, deal_id)
        if deal is None:
            raise NotFoundError(f"Deal with id {deal_id} not found")
        return deal

    def create_deal(self, *, deal_in: schemas.DealCreate) -> models.Deal:
        if crud.deal.exists(self.db, name=deal_in.name):
            raise ConflictError("Deal name already exists")
        deal = crud.deal.create(self.db, obj_in=deal_in)
        logger.info("Deal %s created (%s%%, %s)", deal.id, deal.discount_percentage, deal.status.value)
        return deal

    def update_deal(self, *, deal_id: int, deal_in: schemas.DealUpdate) -> models.Deal:
        """
        Atualiza a oferta. Se o percentual ou o status mudarem, todos os produtos
        da oferta são reprecificados na mesma transação.
        """
        deal = self.get(deal_id)
        update_data = deal_in.model_dump(exclude_unset=True)

        new_name = update_data.get("name")
        if new_name and crud.deal.exists(self.db, name=new_name, exclude_id=deal.id):
            raise ConflictError("Deal name already exists")

        reprice = any(
            field in update_data and update_data[field] != getattr(deal, field)
            for field in ("discount_percentage", "status")
        )

        try:
            crud.deal.apply(db_obj=deal, obj_in=update_data)
            if reprice:
                self.pricing_engine.reprice_products_for_deal(deal=deal)
            self.db.commit()
            self.db.refresh(deal)
        except Exception:
            self.db.rollback()
            raise
        logger.info("Deal %s updated (repriced=%s)", deal.id, reprice)
        return deal

    def delete_deal(self, *, deal_id: int) -> None:
        """Desvincula os produtos (recalculando o preço sem a oferta) e apaga a oferta."""
        deal = self.get(deal_id)
        if crud.banner.is_referenced(self.db, deal_id=deal_id) or crud.homepage_section.is_referenced(
            self.db, deal_id=deal_id
        ):
            raise ConflictError(f"Deal {deal_id} is selected by a banner or homepage section")

        try:
            products = crud.product.get_by_deal(self.db, deal_id=deal_id)
            for product in products:
                product.deal = None
                product.deal_id = None
                self.pricing_engine.price_product(product=product)
            self.db.delete(deal)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Deal %s deleted, %d product(s) unassigned", deal_id, len(products))

    def list_deals(self, *, status: models.DealStatus | None = None) -> list[dict]:
        rows = crud.deal.get_multi_with_counts(self.db, status=status)
        return [
            {**schemas.Deal.model_validate(deal).model_dump(), "product_count": count}
            for deal, count in rows
        ]
