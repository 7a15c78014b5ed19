# ──────────────────────────────────────────────────────────────────────
# SCPN Superconductors — Critical Surface Diagnostics
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""
Structured out-of-range reporting for the superconductor evaluators.

Evaluators never stop on a boundary violation: they hand a
``DiagnosticEvent`` to an injected reporter and keep going on the
extrapolation branch. Only a NaN result is unrecoverable and raises
``CriticalSurfaceNaNError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


class DiagnosticCode(IntEnum):
    REDUCED_TEMPERATURE = 159
    REDUCED_FIELD_AT_ZERO_TEMPERATURE = 160
    REDUCED_FIELD = 161
    NEGATIVE_STRAIN_FUNCTION = 162
    INVALID_INNER_DIAMETER = 163


_DEFAULT_MESSAGES: Dict[DiagnosticCode, str] = {
    DiagnosticCode.REDUCED_TEMPERATURE: "WST: reduced temperature t >= 1 (temperature, tc0eps)",
    DiagnosticCode.REDUCED_FIELD_AT_ZERO_TEMPERATURE: "WST: reduced field at 0 K >= 1 (bmax, bc20eps)",
    DiagnosticCode.REDUCED_FIELD: "WST: reduced field bmax/bcrit >= 1 (bmax, bcrit)",
    DiagnosticCode.NEGATIVE_STRAIN_FUNCTION: "WST: strain function < 0 (strfun, strain)",
    DiagnosticCode.INVALID_INNER_DIAMETER: "CroCo: inner diameter <= 0 (croco_id, croco_thick)",
}


@dataclass(frozen=True)
class DiagnosticEvent:
    code: DiagnosticCode
    value1: float
    value2: float
    message: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", _DEFAULT_MESSAGES[self.code])

    def as_dict(self) -> Dict[str, Any]:
        return {
            "code": int(self.code),
            "name": self.code.name,
            "value1": float(self.value1),
            "value2": float(self.value2),
            "message": self.message,
        }


Reporter = Callable[[DiagnosticEvent], None]


def log_diagnostic(event: DiagnosticEvent) -> None:
    """Default reporter: one WARNING record per event."""
    logger.warning(
        "%s [code=%d] value1=%.6g value2=%.6g",
        event.message,
        int(event.code),
        float(event.value1),
        float(event.value2),
        extra={"physics_context": event.as_dict()},
    )


@dataclass
class DiagnosticCollector:
    """
    Reporter that keeps every event it receives.

    Useful in sweeps and optimiser loops where the caller wants to inspect
    which design points left the valid domain. Set ``log_events=False`` to
    keep the log quiet.
    """

    log_events: bool = True
    events: List[DiagnosticEvent] = field(default_factory=list)

    def __call__(self, event: DiagnosticEvent) -> None:
        self.events.append(event)
        if self.log_events:
            log_diagnostic(event)

    def codes(self) -> List[DiagnosticCode]:
        return [event.code for event in self.events]

    def has(self, code: DiagnosticCode) -> bool:
        return any(event.code == code for event in self.events)

    def clear(self) -> None:
        self.events.clear()


def emit(
    reporter: Optional[Reporter],
    code: DiagnosticCode,
    value1: float,
    value2: float,
) -> DiagnosticEvent:
    event = DiagnosticEvent(code=code, value1=float(value1), value2=float(value2))
    (reporter or log_diagnostic)(event)
    return event


class CriticalSurfaceNaNError(RuntimeError):
    """Raised when a critical-surface evaluation produces NaN even on its fallback branch."""

    def __init__(self, label: str, context: Mapping[str, float]) -> None:
        self.label = label
        self.context = {name: float(value) for name, value in context.items()}
        super().__init__(self.format_dump())

    def format_dump(self) -> str:
        fields = " ".join(f"{name}={value:.3e}" for name, value in self.context.items())
        return f"{self.label} is NaN. {fields}"
