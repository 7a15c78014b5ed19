# ──────────────────────────────────────────────────────────────────────
# SCPN Superconductors — Structured Logging Configuration
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ──────────────────────────────────────────────────────────────────────
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

ROOT_LOGGER_NAME = "scpn_superconductors"


class SuperconductorJSONFormatter(logging.Formatter):
    """
    JSON formatter for the superconductor evaluators.
    Diagnostic events arrive with a ``physics_context`` extra holding the
    code and the two offending values.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        if hasattr(record, "physics_context"):
            log_data["physics_context"] = record.physics_context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=float)


def setup_superconductor_logging(
    level: int = logging.INFO,
    json_output: bool = True,
    log_file: str | None = None,
) -> logging.Logger:
    """
    Initializes logging for the ``scpn_superconductors`` logger tree.
    Existing handlers on that logger are replaced.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    if json_output:
        console_handler.setFormatter(SuperconductorJSONFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
        ))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(SuperconductorJSONFormatter() if json_output else logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        root_logger.addHandler(file_handler)

    root_logger.debug("Structured logging initialized (json=%s)", json_output)
    return root_logger
