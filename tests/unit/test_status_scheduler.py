# tests/unit/test_status_scheduler.py

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timedelta, timezone

from storeadmin import crud
from storeadmin.models import Banner, BannerStatus
from storeadmin.services.errors import InvalidArgumentError
from storeadmin.services.status_scheduler import (
    classify_window, sweep_banner_statuses, validate_window,
)

T = datetime(2024, 6, 1, 12, 0, 0)
HOUR = timedelta(hours=1)

@pytest.mark.parametrize(
    "start, end, expected",
    [
        (T + HOUR, T + 2 * HOUR, BannerStatus.SCHEDULED),
        (T - HOUR, T + HOUR, BannerStatus.ACTIVE),
        (T - 2 * HOUR, T - HOUR, BannerStatus.EXPIRED),
        # Os limites da janela contam como ativos
        (T, T + HOUR, BannerStatus.ACTIVE),
        (T - HOUR, T, BannerStatus.ACTIVE),
        (T, T, BannerStatus.ACTIVE),
    ],
)
def test_classify_window(start, end, expected):
    assert classify_window(T, start, end) == expected

def test_classify_window_normalizes_aware_datetimes():
    # 09:30 em UTC-3 é 12:30 UTC, meia hora depois de T
    brt = timezone(timedelta(hours=-3))
    start = datetime(2024, 6, 1, 9, 30, tzinfo=brt)
    assert classify_window(T, start, start + HOUR) == BannerStatus.SCHEDULED
    assert classify_window(T.replace(tzinfo=timezone.utc), T - HOUR, T + HOUR) == BannerStatus.ACTIVE

def test_validate_window_rejects_start_after_end():
    with pytest.raises(InvalidArgumentError):
        validate_window(T + HOUR, T)
    validate_window(T, T)  # janela de duração zero é válida

def _banner(id: int, start: datetime, end: datetime, status: BannerStatus) -> Banner:
    return Banner(id=id, name=f"b{id}", start_date=start, end_date=end, status=status)

def test_sweep_writes_only_changed_banners(mocker):
    """
    A varredura só altera os banners cujo status calculado difere do gravado
    e faz um único commit.
    """
    # --- Arrange ---
    mock_db = MagicMock()
    banners = [
        _banner(1, T + HOUR, T + 2 * HOUR, BannerStatus.SCHEDULED),  # já correto
        _banner(2, T - HOUR, T + HOUR, BannerStatus.SCHEDULED),      # deve ficar ACTIVE
        _banner(3, T - 2 * HOUR, T - HOUR, BannerStatus.ACTIVE),     # deve ficar EXPIRED
    ]
    mocker.patch.object(crud.banner, "get_all_for_sweep", return_value=banners)

    # --- Act ---
    changed = sweep_banner_statuses(mock_db, now=T)

    # --- Assert ---
    assert changed == 2
    assert [b.status for b in banners] == [
        BannerStatus.SCHEDULED, BannerStatus.ACTIVE, BannerStatus.EXPIRED
    ]
    mock_db.commit.assert_called_once()

def test_sweep_is_idempotent(mocker):
    mock_db = MagicMock()
    banners = [_banner(1, T - HOUR, T + HOUR, BannerStatus.SCHEDULED)]
    mocker.patch.object(crud.banner, "get_all_for_sweep", return_value=banners)

    assert sweep_banner_statuses(mock_db, now=T) == 1
    mock_db.commit.reset_mock()

    # Segunda passada no mesmo instante: nenhuma escrita
    assert sweep_banner_statuses(mock_db, now=T) == 0
    mock_db.commit.assert_not_called()

def test_sweep_rolls_back_on_failure(mocker):
    mock_db = MagicMock()
    mock_db.commit.side_effect = RuntimeError("connection lost")
    banners = [_banner(1, T - HOUR, T + HOUR, BannerStatus.SCHEDULED)]
    mocker.patch.object(crud.banner, "get_all_for_sweep", return_value=banners)

    with pytest.raises(RuntimeError):
        sweep_banner_statuses(mock_db, now=T)
    mock_db.rollback.assert_called_once()
