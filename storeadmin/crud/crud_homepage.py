# storeadmin/crud/crud_homepage.py

from sqlalchemy.orm import Session, selectinload

from .crud_display import CRUDDisplay
from .. import models, schemas

class CRUDHomePageSection(
    CRUDDisplay[models.HomePageSection, schemas.HomePageSectionCreate, schemas.HomePageSectionUpdate]
):
    def get_multi_for_display(
        self, db: Session, *, include_inactive: bool = False
    ) -> list[models.HomePageSection]:
        query = db.query(self.model).options(selectinload(self.model.product_links))
        if not include_inactive:
            query = query.filter(self.model.is_active.is_(True))
        return query.order_by(self.model.created_at.desc(), self.model.id.desc()).all()

homepage_section = CRUDHomePageSection(models.HomePageSection)
