# storeadmin/routers/products.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..services.errors import ServiceError
from ..services.product_service import ProductService
from .errors import to_http_exception

router = APIRouter(
    prefix="/products",
    tags=["Products"]
)

def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)

@router.get("/", response_model=List[schemas.Product])
def read_products(
    subcategory_id: int | None = None,
    deal_id: int | None = None,
    skip: int = 0,
    limit: int = 100,
    service: ProductService = Depends(get_product_service)
):
    return service.list_products(subcategory_id=subcategory_id, deal_id=deal_id, skip=skip, limit=limit)

@router.post("/", response_model=schemas.Product, status_code=status.HTTP_201_CREATED)
def create_product(
    product_in: schemas.ProductCreate,
    service: ProductService = Depends(get_product_service)
):
    """
    Cria um produto e calcula o preço final (desconto do lojista + oferta ativa).
    Um preço final negativo é recusado com 400.
    """
    try:
        return service.create_product(product_in=product_in)
    except ServiceError as e:
        raise to_http_exception(e)

@router.get("/{product_id}", response_model=schemas.Product)
def read_product(product_id: int, service: ProductService = Depends(get_product_service)):
    try:
        return service.get(product_id)
    except ServiceError as e:
        raise to_http_exception(e)

@router.put("/{product_id}", response_model=schemas.Product)
def update_product(
    product_id: int,
    product_in: schemas.ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    try:
        return service.update_product(product_id=product_id, product_in=product_in)
    except ServiceError as e:
        raise to_http_exception(e)

@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    try:
        service.delete_product(product_id=product_id)
    except ServiceError as e:
        raise to_http_exception(e)
    return None
