# storeadmin/services/pricing_engine.py

import logging
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session

from .. import models, crud
from ..models import DiscountType, DealStatus
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")

def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() evita herdar a imprecisão binária de floats
    return Decimal(str(value))

def compute_final_price(
    base_price,
    discount_amount,
    discount_type: DiscountType,
    deal_discount_percent=0,
) -> Decimal:
    """
    Calcula o preço final de venda.

    1. Aplica o desconto do lojista: percentual (base * d / 100) ou fixo (d).
    2. Subtrai o desconto da oferta, sempre calculado sobre o preço BASE
       original (os descontos se somam, não se compõem).
    3. Arredonda uma única vez para 2 casas, com meio para cima (ROUND_HALF_UP).

    Levanta InvalidArgumentError se o resultado for negativo; o valor nunca é
    "grampeado" em zero.
    """
    base = _as_decimal(base_price)
    discount = _as_decimal(discount_amount or 0)
    deal_percent = _as_decimal(deal_discount_percent or 0)

    if base < 0:
        raise InvalidArgumentError("base price cannot be negative")
    if discount < 0:
        raise InvalidArgumentError("discount cannot be negative")
    if deal_percent < 0:
        raise InvalidArgumentError("deal discount cannot be negative")

    if discount_type == DiscountType.PERCENTAGE:
        after_vendor_discount = base - base * discount / HUNDRED
    elif discount_type == DiscountType.FLAT:
        after_vendor_discount = base - discount
    else:
        raise InvalidArgumentError(f"unsupported discount type: {discount_type}")

    final_price = after_vendor_discount - base * deal_percent / HUNDRED
    final_price = final_price.quantize(CENTS, rounding=ROUND_HALF_UP)

    if final_price < 0:
        raise InvalidArgumentError("final price cannot be negative")
    return final_price

class PricingEngine:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def deal_discount_for(deal: models.Deal | None) -> Decimal:
        """Percentual da oferta que conta no preço: só ofertas ENABLED descontam."""
        if deal is None or deal.status != DealStatus.ENABLED:
            return Decimal("0")
        return _as_decimal(deal.discount_percentage)

    def price_product(self, *, product: models.Product, deal: models.Deal | None = None) -> Decimal:
        """
        Recalcula e grava (sem commit) o preço final de um produto.
        Se `deal` não for passado, usa a oferta já vinculada ao produto.
        """
        if deal is None and product.deal_id is not None:
            deal = product.deal if product.deal is not None else crud.deal.get(self.db, product.deal_id)
        product.final_price = compute_final_price(
            product.base_price,
            product.discount,
            product.discount_type,
            self.deal_discount_for(deal),
        )
        return product.final_price

    def reprice_products_for_deal(self, *, deal: models.Deal) -> int:
        """
        Recalcula o preço de todos os produtos da oferta. Não faz commit:
        se algum produto ficar negativo, a exceção sobe e o chamador desfaz tudo.
        """
        products = crud.product.get_by_deal(self.db, deal_id=deal.id)
        for product in products:
            self.price_product(product=product, deal=deal)
        logger.info("Repriced %d product(s) for deal %s", len(products), deal.id)
        return len(products)

    def get_current_price_for_product(self, *, product: models.Product) -> Decimal:
        """
        Preço cobrado no checkout: o preço final em cache ou, se ainda não
        calculado, o cálculo na hora.
        """
        if product.final_price is not None:
            return _as_decimal(product.final_price)
        return compute_final_price(
            product.base_price,
            product.discount,
            product.discount_type,
            self.deal_discount_for(product.deal),
        )
