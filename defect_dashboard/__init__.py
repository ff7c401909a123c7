from __future__ import annotations

__version__ = "1.2.0"
__name__ = "defect_dashboard"

import os
from pathlib import Path

from chromatrace import LoggingConfig, LoggingSettings


DEFAULT_PATH = Path(os.path.realpath(__file__)).parents[1]


logging_config = LoggingConfig(
    settings=LoggingSettings(
        application_level=os.environ.get("DEFECT_DASHBOARD_LOG_LEVEL", "INFO"),
        enable_tracing=True,
        ignore_nan_trace=True,
        log_level=os.environ.get("DEFECT_DASHBOARD_LOG_LEVEL", "INFO"),
        file_path=os.environ.get("DEFECT_DASHBOARD_LOG_FILE", "logs.log"),
        enable_file_logging="DEFECT_DASHBOARD_LOG_FILE" in os.environ,
        max_bytes=10 * 1024 * 1024,
        backup_count=50,
    )
)
LOGGER = logging_config.get_logger(__name__)


__all__ = ["__version__", "__name__", "LOGGER", "DEFAULT_PATH"]
