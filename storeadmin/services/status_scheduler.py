# storeadmin/services/status_scheduler.py

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from .. import crud
from ..models import BannerStatus
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

def to_naive_utc(value: datetime) -> datetime:
    """As datas são gravadas em UTC sem fuso; datas com fuso são convertidas."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)

def validate_window(start: datetime, end: datetime) -> None:
    if to_naive_utc(start) > to_naive_utc(end):
        raise InvalidArgumentError("start date must be before or equal to end date")

def classify_window(now: datetime, start: datetime, end: datetime) -> BannerStatus:
    """
    SCHEDULED antes do início, ACTIVE entre início e fim (inclusive),
    EXPIRED depois do fim.
    """
    now, start, end = to_naive_utc(now), to_naive_utc(start), to_naive_utc(end)
    if now < start:
        return BannerStatus.SCHEDULED
    if now <= end:
        return BannerStatus.ACTIVE
    return BannerStatus.EXPIRED

def sweep_banner_statuses(db: Session, *, now: datetime | None = None) -> int:
    """
    Reclassifica todos os banners e grava apenas os que mudaram de status.
    Rodar duas vezes seguidas sem o tempo passar não gera novas escritas.

    :return: quantidade de banners atualizados.
    """
    now = to_naive_utc(now) if now is not None else utcnow()
    changed = 0
    try:
        for banner in crud.banner.get_all_for_sweep(db):
            new_status = classify_window(now, banner.start_date, banner.end_date)
            if banner.status != new_status:
                logger.info("Banner %s: %s -> %s", banner.id, banner.status.value, new_status.value)
                banner.status = new_status
                changed += 1
        if changed:
            db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Banner status sweep finished: %d banner(s) updated", changed)
    return changed
