from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Tuple


PROJECT_KEY = "S2SWFE"


class DefectStatus(str, Enum):
    """Workflow statuses of the defect board."""
    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    BLOCKED = "Blocked"
    READY_TO_TEST = "Ready to test"
    REVIEWING = "Reviewing"
    DONE = "Done"
    CANCELED = "Canceled"


class TypeFilter(str, Enum):
    """Issue type selector of the dashboard filter dropdown."""
    ALL = "All"
    BUG = "Bug"
    TASK = "Task"


# Statuses queried when the dashboard asks for "everything open".
DEFECT_STATUS_ORDER: Tuple[str, ...] = (
    DefectStatus.TO_DO.value,
    DefectStatus.IN_PROGRESS.value,
    DefectStatus.BLOCKED.value,
    DefectStatus.READY_TO_TEST.value,
    DefectStatus.REVIEWING.value,
)

EXCLUDED_STATUSES_FOR_CHART: FrozenSet[str] = frozenset(
    {DefectStatus.CANCELED.value, DefectStatus.DONE.value}
)

DEFAULT_CHART_COLOR = "var(--chart-1)"

STATUS_TO_COLOR_MAP: Dict[str, str] = {
    DefectStatus.BLOCKED.value: "var(--chart-1)",
    DefectStatus.IN_PROGRESS.value: "var(--chart-2)",
    DefectStatus.READY_TO_TEST.value: "var(--chart-3)",
    DefectStatus.REVIEWING.value: "var(--chart-4)",
    DefectStatus.TO_DO.value: "var(--chart-5)",
    DefectStatus.DONE.value: "var(--chart-3)",  # completed states reuse chart colors
    DefectStatus.CANCELED.value: "var(--chart-2)",
}

# Statuses on the 7-day trend chart and their keys in the response.
TREND_STATUS_KEYS: Dict[str, str] = {
    DefectStatus.TO_DO.value: "todo",
    DefectStatus.IN_PROGRESS.value: "inProgress",
    DefectStatus.DONE.value: "done",
}

TREND_WINDOW_DAYS = 7
