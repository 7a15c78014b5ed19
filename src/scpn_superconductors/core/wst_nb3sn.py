# ──────────────────────────────────────────────────────────────────────
# SCPN Superconductors — WST Nb3Sn Critical Surface
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""
WST Nb3Sn critical surface.

Strain-corrected scaling law for the Nb3Sn conductor used in the DEMO TF
coils, after V. Corato et al., "Common operating values for DEMO magnets
design for 2016" (EUROfusion WPMAG-REP 16565).

Outside the valid domain (t >= 1, b >= 1, b < 0) every branch is replaced
by a continuous, non-differentiable extrapolation instead of a clamp, so
an optimiser always receives a finite number it can steer back with.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from scpn_superconductors.core.diagnostics import (
    CriticalSurfaceNaNError,
    DiagnosticCode,
    DiagnosticEvent,
    Reporter,
    emit,
)

# Reference constants for the WST strand (T, K)
WST_BC20MAX_T = 32.97
WST_TC0MAX_K = 16.06

# A/mm2 -> A/m2
MM2_TO_M2 = 1.0e6

# Exponent of the t-dependence in Bc2(t) and Tc(b)
_NU = 1.52


@dataclass(frozen=True)
class WSTFitParameters:
    """Fit constants of the WST scaling law."""

    csc: float = 83075.0  # scaling constant C [A T / mm2]
    p: float = 0.593  # low-field exponent
    q: float = 2.156  # high-field exponent
    ca1: float = 50.06  # strain fitting constant C_a1
    ca2: float = 0.0  # strain fitting constant C_a2
    eps0a: float = 0.00312  # epsilon_{0,a}


WST_FIT = WSTFitParameters()


class WSTCriticalSurface(NamedTuple):
    jcrit: float  # A/m2
    bcrit: float  # T
    tcrit: float  # K


@dataclass(frozen=True)
class WSTEvaluation:
    surface: WSTCriticalSurface
    epssh: float
    strfun: float
    bc20eps: float
    tc0eps: float
    t: float
    bzero: float
    bred: float
    jc1: float
    jc2: float
    jc3: float
    events: Tuple[DiagnosticEvent, ...] = ()

    @property
    def in_valid_domain(self) -> bool:
        return not self.events


def _shear_strain_and_strain_function(
    strain: np.float64,
    fit: WSTFitParameters,
) -> Tuple[np.float64, np.float64]:
    ca1 = np.float64(fit.ca1)
    ca2 = np.float64(fit.ca2)
    eps0a = np.float64(fit.eps0a)

    epssh = (ca2 * eps0a) / np.sqrt(ca1**2 - ca2**2)

    # 0.83 < s < 1.0 for -0.005 < strain < 0.005
    strfun = np.sqrt(epssh**2 + eps0a**2) - np.sqrt((strain - epssh) ** 2 + eps0a**2)
    strfun = strfun * ca1 - ca2 * strain
    strfun = 1.0 + strfun / (1.0 - ca1 * eps0a)
    return epssh, strfun


def strain_function(strain: float, fit: WSTFitParameters = WST_FIT) -> float:
    """Strain degradation factor s(epsilon); equals 1 at zero strain."""
    with np.errstate(divide="ignore", invalid="ignore"):
        _, strfun = _shear_strain_and_strain_function(np.float64(strain), fit)
    return float(strfun)


def evaluate_wst_detailed(
    temperature: float,
    bmax: float,
    strain: float,
    bc20max: float = WST_BC20MAX_T,
    tc0max: float = WST_TC0MAX_K,
    *,
    fit: WSTFitParameters = WST_FIT,
    reporter: Optional[Reporter] = None,
) -> WSTEvaluation:
    """
    Evaluate the WST critical surface and keep every intermediate quantity.

    Out-of-range conditions are passed to ``reporter`` (default: log
    warning) and evaluation continues. Raises ``CriticalSurfaceNaNError``
    when the field-shape fallback or the final current density is NaN.
    """
    events: List[DiagnosticEvent] = []

    def report(code: DiagnosticCode, value1: float, value2: float) -> None:
        events.append(emit(reporter, code, value1, value2))

    temperature = np.float64(temperature)
    bmax = np.float64(bmax)
    strain = np.float64(strain)
    bc20max = np.float64(bc20max)
    tc0max = np.float64(tc0max)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        epssh, strfun = _shear_strain_and_strain_function(strain, fit)
        if strfun < 0.0:
            report(DiagnosticCode.NEGATIVE_STRAIN_FUNCTION, strfun, strain)

        # B*_C2(0, eps) and T*_C(0, eps)
        bc20eps = bc20max * strfun
        tc0eps = tc0max * np.power(strfun, 1.0 / 3.0)

        # Stays < 1 for temperature < 0.94 * tc0max
        t = temperature / tc0eps
        if t >= 1.0:
            report(DiagnosticCode.REDUCED_TEMPERATURE, temperature, tc0eps)

        # Stays < 1 for bmax < 0.83 * bc20max
        bzero = bmax / bc20eps
        if bzero >= 1.0:
            report(DiagnosticCode.REDUCED_FIELD_AT_ZERO_TEMPERATURE, bmax, bc20eps)

        if bzero < 1.0:
            tcrit = tc0eps * np.power(1.0 - bzero, 1.0 / _NU)
        else:
            # Flat beyond bzero = 1
            tcrit = tc0eps

        # Negative if t > 1
        if t > 0.0:
            bcrit = bc20eps * (1.0 - np.power(t, _NU))
        else:
            bcrit = bc20eps * (1.0 - t)

        bred = bmax / bcrit
        if bred >= 1.0:
            report(DiagnosticCode.REDUCED_FIELD, bmax, bcrit)

        if 0.0 < bred < 1.0:
            jc3 = np.power(bred, fit.p) * np.power(1.0 - bred, fit.q)
        else:
            # Real (negative) and continuous in bred outside (0, 1)
            jc3 = bred * (1.0 - bred)
            if np.isnan(jc3):
                raise CriticalSurfaceNaNError(
                    "jc3",
                    {"bred": bred, "bmax": bmax, "bcrit": bcrit, "t": t},
                )

        jc1 = (np.float64(fit.csc) / bmax) * strfun

        if t > 0.0:
            jc2 = (1.0 - np.power(t, _NU)) * (1.0 - t**2)
        else:
            jc2 = (1.0 - t) * (1.0 - t**2)

        jcrit = jc1 * jc2 * jc3 * MM2_TO_M2

    if np.isnan(jcrit):
        raise CriticalSurfaceNaNError(
            "WST jcrit",
            {
                "jc1": jc1,
                "jc2": jc2,
                "jc3": jc3,
                "t": t,
                "temperature": temperature,
                "bmax": bmax,
                "strain": strain,
                "bc20max": bc20max,
                "tc0max": tc0max,
                "jcrit": jcrit,
                "bcrit": bcrit,
                "tcrit": tcrit,
            },
        )

    return WSTEvaluation(
        surface=WSTCriticalSurface(float(jcrit), float(bcrit), float(tcrit)),
        epssh=float(epssh),
        strfun=float(strfun),
        bc20eps=float(bc20eps),
        tc0eps=float(tc0eps),
        t=float(t),
        bzero=float(bzero),
        bred=float(bred),
        jc1=float(jc1),
        jc2=float(jc2),
        jc3=float(jc3),
        events=tuple(events),
    )


def evaluate_wst(
    temperature: float,
    bmax: float,
    strain: float,
    bc20max: float = WST_BC20MAX_T,
    tc0max: float = WST_TC0MAX_K,
    *,
    fit: WSTFitParameters = WST_FIT,
    reporter: Optional[Reporter] = None,
) -> WSTCriticalSurface:
    """
    WST Nb3Sn critical surface.

    temperature: conductor temperature (K)
    bmax: peak field at the conductor (T)
    strain: signed strain in the superconductor
    bc20max: upper critical field at zero temperature and strain (T)
    tc0max: critical temperature at zero field and strain (K)
    Returns: (jcrit [A/m2], bcrit [T], tcrit [K])
    """
    return evaluate_wst_detailed(
        temperature,
        bmax,
        strain,
        bc20max,
        tc0max,
        fit=fit,
        reporter=reporter,
    ).surface
