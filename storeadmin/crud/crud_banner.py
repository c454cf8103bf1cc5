# storeadmin/crud/crud_banner.py

from sqlalchemy.orm import Session, load_only, selectinload

from .crud_display import CRUDDisplay
from .. import models, schemas

class CRUDBanner(CRUDDisplay[models.Banner, schemas.BannerCreate, schemas.BannerUpdate]):
    def get_by_name(self, db: Session, *, name: str) -> models.Banner | None:
        return db.query(self.model).filter(self.model.name == name).first()

    def get_multi_by_status(
        self, db: Session, *, status: models.BannerStatus | None = None, skip: int = 0, limit: int = 100
    ) -> list[models.Banner]:
        query = db.query(self.model).options(selectinload(self.model.product_links))
        if status is not None:
            query = query.filter(self.model.status == status)
        return query.order_by(self.model.start_date.desc()).offset(skip).limit(limit).all()

    def search(self, db: Session, *, name: str, limit: int = 20) -> list[models.Banner]:
        return (
            db.query(self.model)
            .options(selectinload(self.model.product_links))
            .filter(self.model.name.ilike(f"%{name}%"))
            .order_by(self.model.name)
            .limit(limit)
            .all()
        )

    def get_all_for_sweep(self, db: Session) -> list[models.Banner]:
        """Carrega apenas as colunas usadas pela varredura de status."""
        return (
            db.query(self.model)
            .options(load_only(self.model.id, self.model.status, self.model.start_date, self.model.end_date))
            .order_by(self.model.id)
            .all()
        )

banner = CRUDBanner(models.Banner)
