# storeadmin/routers/homepage.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..services.errors import ServiceError
from ..services.homepage_service import HomePageSectionService
from .errors import to_http_exception

router = APIRouter(
    prefix="/homepage",
    tags=["Homepage Sections"]
)

def get_section_service(db: Session = Depends(get_db)) -> HomePageSectionService:
    return HomePageSectionService(db)

@router.post("/", response_model=schemas.HomePageSection, status_code=status.HTTP_201_CREATED)
def create_section(
    section_in: schemas.HomePageSectionCreate,
    service: HomePageSectionService = Depends(get_section_service)
):
    try:
        return service.create_section(section_in=section_in)
    except ServiceError as e:
        raise to_http_exception(e)

@router.get("/", response_model=List[schemas.HomePageSection])
def read_sections(
    include_inactive: bool = False,
    service: HomePageSectionService = Depends(get_section_service)
):
    """Lista as seções da home, mais recentes primeiro. Por padrão só as ativas."""
    return service.list_sections(include_inactive=include_inactive)

@router.get("/check-title")
def check_title(title: str, service: HomePageSectionService = Depends(get_section_service)):
    """Indica se o título já está em uso (para validação no formulário do admin)."""
    return {"exists": service.title_exists(title=title)}

@router.get("/{section_id}", response_model=schemas.HomePageSection)
def read_section(section_id: int, service: HomePageSectionService = Depends(get_section_service)):
    try:
        return service.get(section_id)
    except ServiceError as e:
        raise to_http_exception(e)

@router.get("/{section_id}/products", response_model=List[schemas.Product])
def read_section_products(
    section_id: int,
    limit: int = 50,
    service: HomePageSectionService = Depends(get_section_service)
):
    try:
        return service.display_products(section_id=section_id, limit=limit)
    except ServiceError as e:
        raise to_http_exception(e)

@router.put("/{section_id}", response_model=schemas.HomePageSection)
def update_section(
    section_id: int,
    section_in: schemas.HomePageSectionUpdate,
    service: HomePageSectionService = Depends(get_section_service)
):
    try:
        return service.update_section(section_id=section_id, section_in=section_in)
    except ServiceError as e:
        raise to_http_exception(e)

@router.patch("/{section_id}/toggle", response_model=schemas.HomePageSection)
def toggle_section(section_id: int, service: HomePageSectionService = Depends(get_section_service)):
    try:
        return service.toggle_section(section_id=section_id)
    except ServiceError as e:
        raise to_http_exception(e)

@router.delete("/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_section(section_id: int, service: HomePageSectionService = Depends(get_section_service)):
    try:
        service.delete_section(section_id=section_id)
    except ServiceError as e:
        raise to_http_exception(e)
    return None
