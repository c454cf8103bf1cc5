# storeadmin/routers/banners.py

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import get_db
from ..services.banner_service import BannerService
from ..services.errors import ServiceError
from .errors import to_http_exception

router = APIRouter(
    prefix="/banners",
    tags=["Banners"]
)

def get_banner_service(db: Session = Depends(get_db)) -> BannerService:
    return BannerService(db)

@router.post("/", response_model=schemas.Banner, status_code=status.HTTP_201_CREATED)
def create_banner(
    banner_in: schemas.BannerCreate,
    service: BannerService = Depends(get_banner_service)
):
    """
    Cria um banner. A fonte de produtos é validada e o status é calculado
    a partir da janela de datas.
    """
    try:
        return service.create_banner(banner_in=banner_in)
    except ServiceError as e:
        raise to_http_exception(e)

@router.get("/", response_model=List[schemas.Banner])
def read_banners(
    status_filter: models.BannerStatus | None = Query(None, alias="status"),
    skip: int = 0,
    limit: int = 100,
    service: BannerService = Depends(get_banner_service)
):
    return service.list_banners(status=status_filter, skip=skip, limit=limit)

@router.get("/search", response_model=List[schemas.Banner])
def search_banners(name: str, service: BannerService = Depends(get_banner_service)):
    return service.search(name=name)

@router.get("/{banner_id}", response_model=schemas.Banner)
def read_banner(banner_id: int, service: BannerService = Depends(get_banner_service)):
    try:
        return service.get(banner_id)
    except ServiceError as e:
        raise to_http_exception(e)

@router.get("/{banner_id}/products", response_model=List[schemas.Product])
def read_banner_products(
    banner_id: int,
    limit: int = 50,
    service: BannerService = Depends(get_banner_service)
):
    """Produtos exibidos pelo banner, resolvidos a partir da fonte configurada."""
    try:
        return service.display_products(banner_id=banner_id, limit=limit)
    except ServiceError as e:
        raise to_http_exception(e)

@router.put("/{banner_id}", response_model=schemas.Banner)
def update_banner(
    banner_id: int,
    banner_in: schemas.BannerUpdate,
    service: BannerService = Depends(get_banner_service)
):
    try:
        return service.update_banner(banner_id=banner_id, banner_in=banner_in)
    except ServiceError as e:
        raise to_http_exception(e)

@router.delete("/{banner_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_banner(banner_id: int, service: BannerService = Depends(get_banner_service)):
    try:
        service.delete_banner(banner_id=banner_id)
    except ServiceError as e:
        raise to_http_exception(e)
    return None
