"""Single hook for every silent default taken by the dashboard.

An unknown type filter quietly becomes ``Bug`` and a failed count quietly
becomes ``0``. Both stay silent for the API consumer, but each one is
logged and counted here so an operator (or a test) can tell a real zero
from a degraded one.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict

from defect_dashboard import LOGGER

TYPE_FILTER = "type_filter"
COUNT = "count"


class FallbackMonitor:
    """Counts fallbacks per reason and logs each one."""

    def __init__(self) -> None:
        self.counts: Counter = Counter()

    def record(self, reason: str, detail: str, **context: Any) -> None:
        self.counts[reason] += 1
        extra = ", ".join(f"{key}={value!r}" for key, value in context.items())
        LOGGER.warning(f"Fallback [{reason}]: {detail}" + (f" ({extra})" if extra else ""))

    def total(self, reason: str) -> int:
        return self.counts[reason]

    def snapshot(self) -> Dict[str, int]:
        return dict(self.counts)

    def reset(self) -> None:
        self.counts.clear()


FALLBACK_MONITOR = FallbackMonitor()
