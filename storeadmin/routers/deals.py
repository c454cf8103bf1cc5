# storeadmin/routers/deals.py

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import get_db
from ..services.deal_service import DealService
from ..services.errors import ServiceError
from .errors import to_http_exception

router = APIRouter(
    prefix="/deals",
    tags=["Deals"]
)

def get_deal_service(db: Session = Depends(get_db)) -> DealService:
    return DealService(db)

@router.post("/", response_model=schemas.Deal, status_code=status.HTTP_201_CREATED)
def create_deal(deal_in: schemas.DealCreate, service: DealService = Depends(get_deal_service)):
    try:
        return service.create_deal(deal_in=deal_in)
    except ServiceError as e:
        raise to_http_exception(e)

@router.get("/", response_model=List[schemas.DealWithCount])
def read_deals(
    status_filter: models.DealStatus | None = Query(None, alias="status"),
    service: DealService = Depends(get_deal_service)
):
    """Lista as ofertas com a quantidade de produtos de cada uma."""
    return service.list_deals(status=status_filter)

@router.get("/{deal_id}", response_model=schemas.Deal)
def read_deal(deal_id: int, service: DealService = Depends(get_deal_service)):
    try:
        return service.get(deal_id)
    except ServiceError as e:
        raise to_http_exception(e)

@router.put("/{deal_id}", response_model=schemas.Deal)
def update_deal(
    deal_id: int,
    deal_in: schemas.DealUpdate,
    service: DealService = Depends(get_deal_service)
):
    """Mudar o percentual ou o status reprecifica todos os produtos da oferta."""
    try:
        return service.update_deal(deal_id=deal_id, deal_in=deal_in)
    except ServiceError as e:
        raise to_http_exception(e)

@router.delete("/{deal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_deal(deal_id: int, service: DealService = Depends(get_deal_service)):
    try:
        service.delete_deal(deal_id=deal_id)
    except ServiceError as e:
        raise to_http_exception(e)
    return None
