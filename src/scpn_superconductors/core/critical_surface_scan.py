# ──────────────────────────────────────────────────────────────────────
# SCPN Superconductors — Critical Surface Scanner
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""Parameter sweeps over the WST and CroCo evaluators."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from numpy.typing import NDArray
from scipy.optimize import brentq

from scpn_superconductors.core.config_schema import (
    CROCO_STRANDS_PER_CABLE,
    TapeGeometry,
    WSTMaterial,
)
from scpn_superconductors.core.croco_cable import evaluate_croco_self_consistent
from scpn_superconductors.core.diagnostics import DiagnosticCollector, DiagnosticEvent
from scpn_superconductors.core.wst_nb3sn import (
    WST_FIT,
    WSTFitParameters,
    evaluate_wst,
    evaluate_wst_detailed,
)

FloatArray = NDArray[np.float64]

logger = logging.getLogger(__name__)

# Reference CroCo strand: 6.4 mm OD, 0.5 mm wall
CROCO_REFERENCE_THICKNESS_RATIO = 0.5 / 6.4

WST_FIELD_SCAN_COLUMNS = [
    "bmax",
    "jcrit",
    "bcrit",
    "tcrit",
    "t",
    "bred",
    "in_valid_domain",
]

CROCO_SCAN_COLUMNS = [
    "croco_od",
    "croco_thick",
    "tape_width",
    "stack_thickness",
    "tapes",
    "conductor_area",
    "conductor_copper_fraction",
    "conductor_hastelloy_fraction",
    "conductor_helium_fraction",
    "conductor_solder_fraction",
    "conductor_rebco_fraction",
    "conductor_critical_current",
]


@dataclass(frozen=True)
class WSTSurfaceGrid:
    temperatures: FloatArray
    fields: FloatArray
    jcrit: FloatArray
    bcrit: FloatArray
    tcrit: FloatArray
    strain: float
    events: Tuple[DiagnosticEvent, ...] = ()


def _as_1d(name: str, values: Iterable[float]) -> FloatArray:
    arr = np.asarray(list(values), dtype=np.float64)
    if arr.ndim != 1 or arr.size == 0:
        raise ValueError(f"{name} must be a non-empty 1D sequence.")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must contain only finite values.")
    return arr


def _log_summary(label: str, collector: DiagnosticCollector, n_points: int) -> None:
    if collector.events:
        codes = sorted({event.code.name for event in collector.events})
        logger.info(
            "%s: %d diagnostics over %d points (%s)",
            label,
            len(collector.events),
            n_points,
            ", ".join(codes),
        )


def scan_wst_grid(
    temperatures: Iterable[float],
    fields: Iterable[float],
    strain: float = 0.0,
    material: Optional[WSTMaterial] = None,
    *,
    fit: WSTFitParameters = WST_FIT,
) -> WSTSurfaceGrid:
    """Evaluate the WST surface on a temperature x field grid."""
    temps = _as_1d("temperatures", temperatures)
    bs = _as_1d("fields", fields)
    material = material or WSTMaterial()
    collector = DiagnosticCollector(log_events=False)

    shape = (temps.size, bs.size)
    jcrit = np.empty(shape, dtype=np.float64)
    bcrit = np.empty(shape, dtype=np.float64)
    tcrit = np.empty(shape, dtype=np.float64)

    for i, temperature in enumerate(temps):
        for j, bmax in enumerate(bs):
            surface = evaluate_wst(
                temperature,
                bmax,
                strain,
                material.bc20max,
                material.tc0max,
                fit=fit,
                reporter=collector,
            )
            jcrit[i, j], bcrit[i, j], tcrit[i, j] = surface

    _log_summary("WST grid scan", collector, temps.size * bs.size)
    return WSTSurfaceGrid(
        temperatures=temps,
        fields=bs,
        jcrit=jcrit,
        bcrit=bcrit,
        tcrit=tcrit,
        strain=float(strain),
        events=tuple(collector.events),
    )


def scan_wst_field(
    fields: Iterable[float],
    temperature: float,
    strain: float = 0.0,
    material: Optional[WSTMaterial] = None,
    *,
    fit: WSTFitParameters = WST_FIT,
) -> pd.DataFrame:
    """One row per field value at fixed temperature and strain."""
    bs = _as_1d("fields", fields)
    material = material or WSTMaterial()
    collector = DiagnosticCollector(log_events=False)

    rows = []
    for bmax in bs:
        ev = evaluate_wst_detailed(
            temperature,
            bmax,
            strain,
            material.bc20max,
            material.tc0max,
            fit=fit,
            reporter=collector,
        )
        rows.append(
            {
                "bmax": float(bmax),
                "jcrit": ev.surface.jcrit,
                "bcrit": ev.surface.bcrit,
                "tcrit": ev.surface.tcrit,
                "t": ev.t,
                "bred": ev.bred,
                "in_valid_domain": ev.in_valid_domain,
            }
        )

    _log_summary("WST field scan", collector, bs.size)
    return pd.DataFrame(rows, columns=WST_FIELD_SCAN_COLUMNS)


def wst_current_sharing_temperature(
    jop: float,
    bmax: float,
    strain: float = 0.0,
    material: Optional[WSTMaterial] = None,
    *,
    fit: WSTFitParameters = WST_FIT,
    xtol: float = 1e-6,
) -> float:
    """
    Temperature (K) at which the WST critical current density drops to ``jop``.

    jop: operating current density in the superconductor (A/m2)
    bmax: peak field (T)
    """
    jop = float(jop)
    if not np.isfinite(jop) or jop <= 0.0:
        raise ValueError("jop must be finite and > 0.")
    if not np.isfinite(bmax) or bmax <= 0.0:
        raise ValueError("bmax must be finite and > 0.")
    material = material or WSTMaterial()
    quiet = DiagnosticCollector(log_events=False)

    def margin(temperature: float) -> float:
        surface = evaluate_wst(
            temperature,
            bmax,
            strain,
            material.bc20max,
            material.tc0max,
            fit=fit,
            reporter=quiet,
        )
        return surface.jcrit - jop

    at_zero = evaluate_wst_detailed(
        0.0, bmax, strain, material.bc20max, material.tc0max, fit=fit, reporter=quiet
    )
    if at_zero.bzero >= 1.0:
        raise ValueError(
            f"bmax={bmax:.3f} T is above the strain-corrected Bc20 ({at_zero.bc20eps:.3f} T)."
        )
    if at_zero.surface.jcrit <= jop:
        raise ValueError(
            f"jop={jop:.3e} A/m2 exceeds jcrit at 0 K ({at_zero.surface.jcrit:.3e} A/m2)."
        )

    # jcrit vanishes at tcrit(bmax)
    t_upper = at_zero.surface.tcrit
    if margin(t_upper) > 0.0:
        return float(t_upper)
    return float(brentq(margin, 0.0, t_upper, xtol=xtol))


def scan_croco_diameter(
    jcritsc: float,
    diameters: Iterable[float],
    thickness_ratio: float = CROCO_REFERENCE_THICKNESS_RATIO,
    tape: Optional[TapeGeometry] = None,
    *,
    strands_per_cable: int = CROCO_STRANDS_PER_CABLE,
) -> pd.DataFrame:
    """
    CroCo breakdown versus strand diameter at fixed wall/diameter ratio.
    Fractions refer to the sum of the regional areas of each design.
    """
    ods = _as_1d("diameters", diameters)
    if not 0.0 < thickness_ratio < 0.5:
        raise ValueError("thickness_ratio must be in (0, 0.5).")
    tape = tape or TapeGeometry()
    collector = DiagnosticCollector(log_events=False)

    rows = []
    for od in ods:
        thick = float(od) * thickness_ratio
        res = evaluate_croco_self_consistent(
            jcritsc,
            od,
            thick,
            tape,
            strands_per_cable=strands_per_cable,
            reporter=collector,
        )
        rows.append(
            {
                "croco_od": float(od),
                "croco_thick": thick,
                "tape_width": res.strand.tape_width,
                "stack_thickness": res.strand.stack_thickness,
                "tapes": res.strand.tapes,
                "conductor_area": res.conductor_area,
                "conductor_copper_fraction": res.conductor_copper_fraction,
                "conductor_hastelloy_fraction": res.conductor_hastelloy_fraction,
                "conductor_helium_fraction": res.conductor_helium_fraction,
                "conductor_solder_fraction": res.conductor_solder_fraction,
                "conductor_rebco_fraction": res.conductor_rebco_fraction,
                "conductor_critical_current": res.conductor_critical_current,
            }
        )

    _log_summary("CroCo diameter scan", collector, ods.size)
    return pd.DataFrame(rows, columns=CROCO_SCAN_COLUMNS)


def plot_critical_surface(grid: WSTSurfaceGrid) -> plt.Figure:
    """jcrit versus field, one curve per scanned temperature."""
    fig, ax = plt.subplots(figsize=(10, 6))
    for i, temperature in enumerate(grid.temperatures):
        jc = grid.jcrit[i]
        valid = jc > 0.0
        ax.plot(grid.fields[valid], jc[valid] / 1e6, label=f"T = {temperature:.1f} K")
    ax.set_xlabel("Field B (T)")
    ax.set_ylabel("Jc (A/mm2)")
    ax.set_yscale("log")
    ax.set_title(f"WST Nb3Sn critical surface (strain = {grid.strain:+.4f})")
    ax.legend()
    ax.grid(True, which="both", alpha=0.3)
    return fig
