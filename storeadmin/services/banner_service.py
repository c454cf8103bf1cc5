# storeadmin/services/banner_service.py

import logging

from sqlalchemy.orm import Session

from .. import models, schemas, crud
from .errors import ConflictError, NotFoundError
from .source_resolver import ProductSourceResolver, attach_targets, products_for
from .status_scheduler import classify_window, to_naive_utc, utcnow, validate_window

logger = logging.getLogger(__name__)

class BannerService:
    def __init__(self, db: Session):
        self.db = db
        self.resolver = ProductSourceResolver(db)

    def get(self, banner_id: int) -> models.Banner:
        banner = crud.banner.get(self.db, banner_id)
        if banner is None:
            raise NotFoundError(f"Banner with id {banner_id} not found")
        return banner

    def create_banner(self, *, banner_in: schemas.BannerCreate) -> models.Banner:
        # --- FASE 1: VALIDAÇÕES (somente leitura) ---
        if crud.banner.get_by_name(self.db, name=banner_in.name):
            raise ConflictError(f"Banner with name '{banner_in.name}' already exists")
        validate_window(banner_in.start_date, banner_in.end_date)
        targets = self.resolver.resolve(banner_in.source)

        # --- FASE 2: PERSISTÊNCIA ---
        try:
            start = to_naive_utc(banner_in.start_date)
            end = to_naive_utc(banner_in.end_date)
            banner = models.Banner(
                name=banner_in.name,
                type=banner_in.type,
                start_date=start,
                end_date=end,
                status=classify_window(utcnow(), start, end),
                desktop_image=banner_in.desktop_image,
                mobile_image=banner_in.mobile_image,
            )
            attach_targets(banner, targets)
            crud.banner.add(self.db, db_obj=banner)
            self.db.commit()
            self.db.refresh(banner)
        except Exception:
            self.db.rollback()
            raise
        logger.info("Banner %s created (%s, %s)", banner.id, banner.product_source.value, banner.status.value)
        return banner

    def update_banner(self, *, banner_id: int, banner_in: schemas.BannerUpdate) -> models.Banner:
        """
        Atualização parcial. Se `source` vier, o seletor é resolvido de novo e
        os vínculos antigos são descartados. O status é sempre recalculado.
        """
        banner = self.get(banner_id)
        update_data = banner_in.model_dump(exclude_unset=True, exclude={"source"})

        # --- FASE 1: VALIDAÇÕES ---
        new_name = update_data.get("name")
        if new_name and crud.banner.exists(self.db, name=new_name, exclude_id=banner.id):
            raise ConflictError(f"Banner with name '{new_name}' already exists")
        start = to_naive_utc(update_data.get("start_date") or banner.start_date)
        end = to_naive_utc(update_data.get("end_date") or banner.end_date)
        validate_window(start, end)
        targets = self.resolver.resolve(banner_in.source) if banner_in.source is not None else None

        # --- FASE 2: PERSISTÊNCIA ---
        try:
            crud.banner.apply(db_obj=banner, obj_in=update_data)
            banner.start_date, banner.end_date = start, end
            banner.status = classify_window(utcnow(), start, end)
            if targets is not None:
                attach_targets(banner, targets)
            self.db.commit()
            self.db.refresh(banner)
        except Exception:
            self.db.rollback()
            raise
        logger.info("Banner %s updated", banner.id)
        return banner

    def delete_banner(self, *, banner_id: int) -> None:
        # Os vínculos com produtos saem junto; produtos, categorias e ofertas ficam
        banner = self.get(banner_id)
        self.db.delete(banner)
        self.db.commit()
        logger.info("Banner %s deleted", banner_id)

    def list_banners(self, *, status: models.BannerStatus | None = None, skip: int = 0, limit: int = 100) -> list[models.Banner]:
        return crud.banner.get_multi_by_status(self.db, status=status, skip=skip, limit=limit)

    def search(self, *, name: str) -> list[models.Banner]:
        return crud.banner.search(self.db, name=name)

    def display_products(self, *, banner_id: int, limit: int = 50) -> list[models.Product]:
        return products_for(self.db, self.get(banner_id), limit=limit)
