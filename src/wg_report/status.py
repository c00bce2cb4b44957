# src/wg_report/status.py
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional

from .models import Status


def _as_utc(value: datetime) -> datetime:
    # une date naïve est considérée comme UTC (handshakes de wg en UTC)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def classify_status(
    known: bool,
    last_handshake: Optional[datetime],
    *,
    now: datetime,
    online_window: timedelta,
    expiry_window: timedelta,
) -> Status:
    """
    Ordre d'évaluation fixe, la première règle qui matche gagne :
    unknown -> online -> dormant -> offline.

    `now` et `last_handshake` peuvent être naïfs, ils sont alors lus en UTC.
    """
    if not known:
        return Status.UNKNOWN

    if last_handshake is None:
        # connu mais jamais de handshake : pas d'âge mesurable
        return Status.OFFLINE

    age = _as_utc(now) - _as_utc(last_handshake)
    if age < online_window:
        return Status.ONLINE
    if age > expiry_window:
        return Status.DORMANT
    return Status.OFFLINE
