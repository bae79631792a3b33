# foia_intel/service/activity.py

"""Best-effort audit logging.

Audit-trail and lookup side paths must never block the primary operation:
``best_effort`` is the single place where their failures are logged and
dropped.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Optional, TypeVar

from foia_intel.core.interfaces import ActivityLogSink, Row

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def best_effort(
    operation: Awaitable[T], what: str, default: Optional[T] = None
) -> Optional[T]:
    """Awaits ``operation``; on any exception logs a warning and returns ``default``.

    Args:
        operation: Awaitable side-path call (activity append, similarity lookup)
        what: Short label used in the log record
        default: Value returned on failure
    """
    try:
        return await operation
    except Exception:
        logger.warning(
            f"Best-effort operation failed: {what}",
            exc_info=True,
            extra={"operation": what},
        )
        return default


class ActivityLogger:
    """Appends audit entries to an activity-log sink without ever raising."""

    def __init__(self, sink: Optional[ActivityLogSink]):
        self.sink = sink

    async def log(self, activity_type: str, action: str, **details: Any) -> Optional[Row]:
        if self.sink is None:
            return None

        entry = {
            "activity_type": activity_type,
            "action": action,
            "timestamp": datetime.now(timezone.utc),
            **details,
        }
        return await best_effort(self.sink.append(entry), f"activity:{activity_type}")
