# ──────────────────────────────────────────────────────────────────────
# SCPN Superconductors — Package Init
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""Critical-surface evaluators for WST Nb3Sn and REBCO CroCo conductors."""

__version__ = "1.0.0"

from .core.diagnostics import CriticalSurfaceNaNError, DiagnosticCode, DiagnosticCollector, DiagnosticEvent
from .core.wst_nb3sn import WSTCriticalSurface, evaluate_wst
from .core.croco_cable import CableAreaBreakdown, evaluate_croco
