# backend/app/services/content_service.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from ..storage.store import DataStore

logger = logging.getLogger(__name__)


def parse_date(value) -> Optional[datetime]:
    """ISO 8601 string (or datetime) as an aware datetime; naive values are taken as UTC."""
    if not value:
        return None
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def banner_visible(banner: dict, now: datetime) -> bool:
    """
    A banner is shown when it is active and ``now`` falls inside its window.
    Either bound may be missing; with neither, the banner is always shown.
    """
    if not banner.get("is_active"):
        return False
    try:
        start = parse_date(banner.get("start_date"))
        end = parse_date(banner.get("end_date"))
    except ValueError:
        logger.warning(f"Banner {banner.get('id')} has an unreadable date window, hiding it")
        return False

    if start is not None and start > now:
        return False
    if end is not None and end < now:
        return False
    return True


def active_banners(store: DataStore, now: Optional[datetime] = None) -> List[dict]:
    now = parse_date(now) or datetime.now(timezone.utc)
    banners = store.banners.find_many(where={"is_active": True}, order_by={"sort_order": "asc"})
    return [b for b in banners if banner_visible(b, now)]


def active_partners(store: DataStore) -> List[dict]:
    return store.partners.find_many(where={"is_active": True}, order_by={"sort_order": "asc"})
