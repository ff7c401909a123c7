"""Defect summary package."""

from defect_dashboard.use_cases.defect_summary.defect_summary_use_case import DefectSummaryUseCase

__all__ = ["DefectSummaryUseCase"]
