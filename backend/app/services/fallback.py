from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..storage.store import DataStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataResult:
    data: Any
    source: str  # "local" | "postgres" | "default"
    warning: str | None = None


def read_with_fallback(
    primary: DataStore,
    read: Callable[[DataStore], Any],
    fallback: Optional[DataStore] = None,
    default: Callable[[], Any] = list,
) -> DataResult:
    """
    Public pages must render even when the database is down:
    try the configured store, then the local files, then a built-in default.
    """
    try:
        return DataResult(data=read(primary), source=primary.mode)
    except Exception as e:
        logger.error(f"Error reading from {primary.mode} store: {e}", exc_info=True)
        warning = f"Fell back from {primary.mode}: {type(e).__name__}"

    if fallback is not None and fallback is not primary:
        try:
            return DataResult(data=read(fallback), source=fallback.mode, warning=warning)
        except Exception as e:
            logger.error(f"Error reading from {fallback.mode} store: {e}", exc_info=True)
            warning = f"Fell back to defaults: {type(e).__name__}"

    return DataResult(data=default(), source="default", warning=warning)
