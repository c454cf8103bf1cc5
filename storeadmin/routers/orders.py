# storeadmin/routers/orders.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..services.errors import ServiceError
from ..services.order_service import OrderService
from .errors import to_http_exception

router = APIRouter(
    prefix="/orders",
    tags=["Orders"]
)

def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)

@router.post("/", response_model=schemas.OrderResponse, status_code=status.HTTP_201_CREATED)
def checkout(
    checkout_request: schemas.CheckoutRequest,
    # Injetamos o SERVIÇO, não o 'db' diretamente
    order_service: OrderService = Depends(get_order_service)
):
    """
    Fecha um pedido: congela o preço atual de cada item, aplica o cupom
    (se houver) e baixa o estoque.
    """
    try:
        return order_service.checkout(checkout_request=checkout_request)
    except ServiceError as e:
        raise to_http_exception(e)

@router.get("/", response_model=List[schemas.OrderResponse])
def read_orders(
    customer_email: str | None = None,
    skip: int = 0,
    limit: int = 25,
    order_service: OrderService = Depends(get_order_service)
):
    return order_service.list_orders(customer_email=customer_email, skip=skip, limit=limit)

@router.get("/{order_id}", response_model=schemas.OrderResponse)
def read_order(order_id: int, order_service: OrderService = Depends(get_order_service)):
    try:
        return order_service.get_order(order_id)
    except ServiceError as e:
        raise to_http_exception(e)
