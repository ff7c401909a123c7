from __future__ import annotations

__all__ = [
    "CountRepositoryInterface",
    "DefectSummaryInterface",
]

from defect_dashboard.use_cases.interfaces.count_repository_interface import CountRepositoryInterface
from defect_dashboard.use_cases.interfaces.defect_summary_interface import DefectSummaryInterface
