# storeadmin/routers/categories.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..database import get_db
from ..services.category_service import CategoryService
from ..services.errors import ServiceError
from .errors import to_http_exception

router = APIRouter(
    prefix="/categories",
    tags=["Categories"]
)

def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)

# --- Categorias ---

@router.post("/", response_model=schemas.Category, status_code=status.HTTP_201_CREATED)
def create_category(
    category_in: schemas.CategoryCreate,
    service: CategoryService = Depends(get_category_service)
):
    try:
        return service.create_category(category_in=category_in)
    except ServiceError as e:
        raise to_http_exception(e)

@router.get("/", response_model=List[schemas.CategoryWithSubcategories])
def read_categories(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.category.get_multi(db, skip=skip, limit=limit)

@router.get("/search", response_model=List[schemas.Category])
def search_categories(name: str, db: Session = Depends(get_db)):
    return crud.category.search(db, name=name)

@router.get("/{category_id}", response_model=schemas.CategoryWithSubcategories)
def read_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    try:
        return service.get_category(category_id)
    except ServiceError as e:
        raise to_http_exception(e)

@router.put("/{category_id}", response_model=schemas.Category)
def update_category(
    category_id: int,
    category_in: schemas.CategoryUpdate,
    service: CategoryService = Depends(get_category_service)
):
    try:
        return service.update_category(category_id=category_id, category_in=category_in)
    except ServiceError as e:
        raise to_http_exception(e)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    try:
        service.delete_category(category_id=category_id)
    except ServiceError as e:
        raise to_http_exception(e)
    return None

# --- Subcategorias ---

@router.post(
    "/{category_id}/subcategories",
    response_model=schemas.Subcategory,
    status_code=status.HTTP_201_CREATED
)
def create_subcategory(
    category_id: int,
    subcategory_in: schemas.SubcategoryCreate,
    service: CategoryService = Depends(get_category_service)
):
    try:
        return service.create_subcategory(category_id=category_id, subcategory_in=subcategory_in)
    except ServiceError as e:
        raise to_http_exception(e)

@router.get("/{category_id}/subcategories", response_model=List[schemas.Subcategory])
def read_subcategories(category_id: int, service: CategoryService = Depends(get_category_service)):
    try:
        return service.list_subcategories(category_id=category_id)
    except ServiceError as e:
        raise to_http_exception(e)

@router.get("/{category_id}/subcategories/{subcategory_id}", response_model=schemas.Subcategory)
def read_subcategory(
    category_id: int,
    subcategory_id: int,
    service: CategoryService = Depends(get_category_service)
):
    try:
        return service.get_subcategory(category_id=category_id, subcategory_id=subcategory_id)
    except ServiceError as e:
        raise to_http_exception(e)

@router.put("/{category_id}/subcategories/{subcategory_id}", response_model=schemas.Subcategory)
def update_subcategory(
    category_id: int,
    subcategory_id: int,
    subcategory_in: schemas.SubcategoryUpdate,
    service: CategoryService = Depends(get_category_service)
):
    try:
        return service.update_subcategory(
            category_id=category_id, subcategory_id=subcategory_id, subcategory_in=subcategory_in
        )
    except ServiceError as e:
        raise to_http_exception(e)

@router.delete("/{category_id}/subcategories/{subcategory_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subcategory(
    category_id: int,
    subcategory_id: int,
    service: CategoryService = Depends(get_category_service)
):
    try:
        service.delete_subcategory(category_id=category_id, subcategory_id=subcategory_id)
    except ServiceError as e:
        raise to_http_exception(e)
    return None
