# storeadmin/services/order_service.py

import logging
from collections import Counter
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session

from .. import models, schemas, crud
from ..core.config import settings
from ..crud import crud_order
from .errors import InvalidArgumentError, NotFoundError
from .pricing_engine import PricingEngine

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

class OrderService:
    def __init__(self, db: Session):
        # O serviço recebe a sessão do banco ao ser instanciado
        self.db = db
        self.pricing_engine = PricingEngine(db)

    def _get_valid_promo(self, promo_code: str) -> models.Promo:
        promo = crud.promo.get_by_code(self.db, promo_code=promo_code)
        if promo is None or not promo.is_valid:
            raise InvalidArgumentError("Invalid or expired promo code")
        return promo

    def checkout(self, *, checkout_request: schemas.CheckoutRequest) -> models.Order:
        """
        Cria um pedido: valida estoque, congela o preço de cada item,
        aplica o cupom (no subtotal ou no frete) e baixa o estoque.
        """
        try:
            # --- FASE 1: VALIDAÇÃO DA LÓGICA DE NEGÓCIO ---
            requested = Counter()
            for item in checkout_request.items:
                requested[item.product_id] += item.quantity

            products = {}
            for product_id, quantity in requested.items():
                # Pega e "trava" o produto até o commit
                product = crud.product.get_for_update(self.db, product_id=product_id)
                if product is None:
                    raise NotFoundError(f"Product with id {product_id} not found")
                if product.status == models.InventoryStatus.OUT_OF_STOCK or quantity > product.stock:
                    raise InvalidArgumentError(
                        f"Insufficient stock for '{product.name}'. Requested: {quantity}, Available: {product.stock}"
                    )
                products[product_id] = product

            promo = self._get_valid_promo(checkout_request.promo_code) if checkout_request.promo_code else None

            prices = {
                product_id: self.pricing_engine.get_current_price_for_product(product=product)
                for product_id, product in products.items()
            }
            subtotal = sum(
                (prices[item.product_id] * item.quantity for item in checkout_request.items), Decimal("0")
            )
            shipping_fee = Decimal(settings.SHIPPING_FEE)
            discount_amount = Decimal("0")
            if promo is not None:
                base = subtotal if promo.apply_on == models.PromoType.LINE_TOTAL else shipping_fee
                discount_amount = (base * promo.discount_percentage / Decimal("100")).quantize(
                    CENTS, rounding=ROUND_HALF_UP
                )
            total_price = (subtotal - discount_amount + shipping_fee).quantize(CENTS, rounding=ROUND_HALF_UP)

            # --- FASE 2: PERSISTÊNCIA ---
            db_order = crud_order.create_order(
                self.db,
                customer_email=checkout_request.customer_email,
                subtotal=subtotal.quantize(CENTS, rounding=ROUND_HALF_UP),
                shipping_fee=shipping_fee,
                discount_amount=discount_amount,
                total_price=total_price,
                applied_promo_code=promo.promo_code if promo else None,
            )
            for item in checkout_request.items:
                crud_order.create_order_item(
                    self.db,
                    order_id=db_order.id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price_at_purchase=prices[item.product_id],
                )
            for product_id, quantity in requested.items():
                crud.product.decrease_stock(self.db, product=products[product_id], quantity=quantity)

            self.db.commit()
            self.db.refresh(db_order)
        except Exception:
            # Em caso de QUALQUER erro, reverter tudo
            self.db.rollback()
            raise
        logger.info("Order %s created for %s, total %s", db_order.id, db_order.customer_email, db_order.total_price)
        return db_order

    def get_order(self, order_id: int) -> models.Order:
        order = crud_order.get_order(self.db, order_id)
        if order is None:
            raise NotFoundError(f"Order with id {order_id} not found")
        return order

    def list_orders(self, *, customer_email: str | None = None, skip: int = 0, limit: int = 25) -> list[models.Order]:
        return crud_order.get_orders(self.db, customer_email=customer_email, skip=skip, limit=limit)
