# ──────────────────────────────────────────────────────────────────────
# SCPN Superconductors — Core Package Init
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
from .diagnostics import (
    CriticalSurfaceNaNError,
    DiagnosticCode,
    DiagnosticCollector,
    DiagnosticEvent,
    log_diagnostic,
)
from .wst_nb3sn import (
    WST_BC20MAX_T,
    WST_FIT,
    WST_TC0MAX_K,
    WSTCriticalSurface,
    WSTEvaluation,
    WSTFitParameters,
    evaluate_wst,
    evaluate_wst_detailed,
    strain_function,
)
from .config_schema import (
    CROCO_STRANDS_PER_CABLE,
    CrocoCableDesign,
    SuperconductorConfig,
    TapeGeometry,
    WSTMaterial,
    WSTOperatingPoint,
    load_config,
    validate_config,
)
from .croco_cable import (
    CableAreaBreakdown,
    CrocoStrand,
    croco_strand,
    evaluate_croco,
    evaluate_croco_self_consistent,
)
from .critical_surface_scan import (
    WSTSurfaceGrid,
    plot_critical_surface,
    scan_croco_diameter,
    scan_wst_field,
    scan_wst_grid,
    wst_current_sharing_temperature,
)
