# storeadmin/crud/crud_order.py

from decimal import Decimal

from sqlalchemy.orm import Session, joinedload

from .. import models

def create_order(
    db: Session,
    *,
    customer_email: str,
    subtotal: Decimal,
    shipping_fee: Decimal,
    discount_amount: Decimal,
    total_price: Decimal,
    applied_promo_code: str | None = None,
) -> models.Order:
    """
    Cria a entidade Order no banco. Não faz commit.
    """
    db_order = models.Order(
        customer_email=customer_email,
        status=models.OrderStatus.CONFIRMED,
        subtotal=subtotal,
        shipping_fee=shipping_fee,
        discount_amount=discount_amount,
        total_price=total_price,
        applied_promo_code=applied_promo_code,
    )
    db.add(db_order)
    db.flush()  # Garante que db_order.id esteja disponível para os itens
    return db_order

def create_order_item(db: Session, *, order_id: int, product_id: int, quantity: int, price_at_purchase: Decimal) -> models.OrderItem:
    """
    Cria a entidade OrderItem no banco. Não faz commit.
    """
    db_item = models.OrderItem(
        order_id=order_id,
        product_id=product_id,
        quantity=quantity,
        price_at_purchase=price_at_purchase
    )
    db.add(db_item)
    return db_item

def get_order(db: Session, order_id: int) -> models.Order | None:
    return (
        db.query(models.Order)
        .options(joinedload(models.Order.items))
        .filter(models.Order.id == order_id)
        .first()
    )

def get_orders(db: Session, *, customer_email: str | None = None, skip: int = 0, limit: int = 25) -> list[models.Order]:
    """
    Busca uma lista paginada de pedidos, mais recentes primeiro.
    Usa 'joinedload' para carregar os itens e evitar o problema N+1.
    """
    query = db.query(models.Order)
    if customer_email:
        query = query.filter(models.Order.customer_email == customer_email)
    return (
        query.order_by(models.Order.id.desc())
        .options(joinedload(models.Order.items))
        .offset(skip)
        .limit(limit)
        .all()
    )
