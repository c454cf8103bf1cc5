# storeadmin/jobs/banner_status.py

import logging
from datetime import datetime

from ..database import SessionLocal
from ..services.status_scheduler import sweep_banner_statuses

logger = logging.getLogger(__name__)

def run_banner_status_sweep(now: datetime | None = None, session_factory=SessionLocal) -> int:
    db = session_factory()
    try:
        return sweep_banner_statuses(db, now=now)
    except Exception:
        logger.exception("Banner status sweep failed")
        raise
    finally:
        db.close()
