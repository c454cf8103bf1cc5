# storeadmin/services/homepage_service.py

import logging

from sqlalchemy.orm import Session

from .. import models, schemas, crud
from .errors import ConflictError, NotFoundError
from .source_resolver import ProductSourceResolver, attach_targets, products_for

logger = logging.getLogger(__name__)

class HomePageSectionService:
    """
    Seções da home usam o caminho estrito do resolvedor: a subcategoria
    sempre precisa vir com a categoria dona dela.
    """
    def __init__(self, db: Session):
        self.db = db
        self.resolver = ProductSourceResolver(db)

    def get(self, section_id: int) -> models.HomePageSection:
        section = crud.homepage_section.get(self.db, section_id)
        if section is None:
            raise NotFoundError(f"Homepage section with id {section_id} not found")
        return section

    def title_exists(self, *, title: str) -> bool:
        return crud.homepage_section.exists(self.db, title=title)

    def create_section(self, *, section_in: schemas.HomePageSectionCreate) -> models.HomePageSection:
        if self.title_exists(title=section_in.title):
            raise ConflictError(f"Homepage section with title '{section_in.title}' already exists")
        targets = self.resolver.resolve(section_in.source, require_category=True)

        try:
            section = models.HomePageSection(title=section_in.title, is_active=section_in.is_active)
            attach_targets(section, targets)
            crud.homepage_section.add(self.db, db_obj=section)
            self.db.commit()
            self.db.refresh(section)
        except Exception:
            self.db.rollback()
            raise
        logger.info("Homepage section %s created (%s)", section.id, section.product_source.value)
        return section

    def update_section(
        self, *, section_id: int, section_in: schemas.HomePageSectionUpdate
    ) -> models.HomePageSection:
        section = self.get(section_id)
        update_data = section_in.model_dump(exclude_unset=True, exclude={"source"})

        new_title = update_data.get("title")
        if new_title and crud.homepage_section.exists(self.db, title=new_title, exclude_id=section.id):
            raise ConflictError(f"Homepage section with title '{new_title}' already exists")
        targets = (
            self.resolver.resolve(section_in.source, require_category=True)
            if section_in.source is not None else None
        )

        try:
            crud.homepage_section.apply(db_obj=section, obj_in=update_data)
            if targets is not None:
                attach_targets(section, targets)
            self.db.commit()
            self.db.refresh(section)
        except Exception:
            self.db.rollback()
            raise
        logger.info("Homepage section %s updated", section.id)
        return section

    def toggle_section(self, *, section_id: int) -> models.HomePageSection:
        section = self.get(section_id)
        section.is_active = not section.is_active
        self.db.commit()
        self.db.refresh(section)
        logger.info("Homepage section %s is_active=%s", section.id, section.is_active)
        return section

    def delete_section(self, *, section_id: int) -> None:
        section = self.get(section_id)
        self.db.delete(section)
        self.db.commit()
        logger.info("Homepage section %s deleted", section_id)

    def list_sections(self, *, include_inactive: bool = False) -> list[models.HomePageSection]:
        return crud.homepage_section.get_multi_for_display(self.db, include_inactive=include_inactive)

    def display_products(self, *, section_id: int, limit: int = 50) -> list[models.Product]:
        return products_for(self.db, self.get(section_id), limit=limit)
