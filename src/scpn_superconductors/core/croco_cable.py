# ──────────────────────────────────────────────────────────────────────
# SCPN Superconductors — CroCo Cable Design
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""
"CroCo" (cross-conductor) strand and cable cross-section for 2nd
generation REBCO tape, scaled from the Lewandowska et al. (2018) strand.

A strand is a copper tube holding a soldered stack of REBCO tapes; the
cable is ``CROCO_STRANDS_PER_CABLE`` strands around a copper bar of one
strand's area.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional

import numpy as np

from scpn_superconductors.core.config_schema import CROCO_STRANDS_PER_CABLE, TapeGeometry
from scpn_superconductors.core.diagnostics import DiagnosticCode, Reporter, emit

# Baseline strand the geometry is scaled from (m)
CROCO_REFERENCE_ID_M = 5.4e-3
CROCO_REFERENCE_TAPE_WIDTH_M = 3.75e-3

_DEFAULT_TAPE = TapeGeometry()


@dataclass(frozen=True)
class CrocoStrand:
    croco_id: float
    scaling: float
    tape_width: float
    tape_thickness: float
    stack_thickness: float
    tapes: float
    copper_area: float
    hastelloy_area: float
    solder_area: float
    rebco_area: float
    croco_strand_area: float
    croco_strand_critical_current: float


@dataclass(frozen=True)
class CableAreaBreakdown:
    strand: CrocoStrand
    strands_per_cable: int
    conductor_area: float
    conductor_critical_current: float
    conductor_copper_bar_area: float
    conductor_copper_area: float
    conductor_copper_fraction: float
    conductor_hastelloy_area: float
    conductor_hastelloy_fraction: float
    conductor_helium_area: float
    conductor_helium_fraction: float
    conductor_solder_area: float
    conductor_solder_fraction: float
    conductor_rebco_area: float
    conductor_rebco_fraction: float

    @property
    def croco_strand_area(self) -> float:
        return self.strand.croco_strand_area

    @property
    def croco_strand_critical_current(self) -> float:
        return self.strand.croco_strand_critical_current

    @property
    def total_regional_area(self) -> float:
        # Copper already includes the central bar
        return (
            self.conductor_copper_area
            + self.conductor_hastelloy_area
            + self.conductor_helium_area
            + self.conductor_solder_area
            + self.conductor_rebco_area
        )

    @property
    def fraction_sum(self) -> float:
        return (
            self.conductor_copper_fraction
            + self.conductor_hastelloy_fraction
            + self.conductor_helium_fraction
            + self.conductor_solder_fraction
            + self.conductor_rebco_fraction
        )

    def with_conductor_area(self, conductor_area: float) -> "CableAreaBreakdown":
        """Same areas, fractions taken against another conductor cross-section."""
        fractions = _fractions(
            {
                "copper": self.conductor_copper_area,
                "hastelloy": self.conductor_hastelloy_area,
                "helium": self.conductor_helium_area,
                "solder": self.conductor_solder_area,
                "rebco": self.conductor_rebco_area,
            },
            conductor_area,
        )
        return replace(
            self,
            conductor_area=float(conductor_area),
            conductor_copper_fraction=fractions["copper"],
            conductor_hastelloy_fraction=fractions["hastelloy"],
            conductor_helium_fraction=fractions["helium"],
            conductor_solder_fraction=fractions["solder"],
            conductor_rebco_fraction=fractions["rebco"],
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def croco_strand(
    jcritsc: float,
    croco_od: float,
    croco_thick: float,
    tape: TapeGeometry = _DEFAULT_TAPE,
    *,
    reporter: Optional[Reporter] = None,
) -> CrocoStrand:
    """Geometry and critical current of a single CroCo strand."""
    d = np.float64(croco_od)
    thick = np.float64(croco_thick)

    croco_id = d - 2.0 * thick
    if croco_id <= 0.0:
        emit(reporter, DiagnosticCode.INVALID_INNER_DIAMETER, croco_id, thick)

    with np.errstate(invalid="ignore"):
        # Ratio of the inner diameter to the baseline strand
        scaling = croco_id / CROCO_REFERENCE_ID_M
        tape_width = scaling * CROCO_REFERENCE_TAPE_WIDTH_M

        tape_thickness = np.float64(tape.total_thickness)
        stack_thickness = np.sqrt(croco_id**2 - tape_width**2)
        tapes = stack_thickness / tape_thickness

        copper_area = (
            np.pi * thick * d - np.pi * thick**2  # tube
            + tape.copper_thickness * tape_width * tapes  # tape copper
        )
        hastelloy_area = tape.hastelloy_thickness * tape_width * tapes
        solder_area = np.pi / 4.0 * croco_id**2 - stack_thickness * tape_width
        rebco_area = tape.rebco_thickness * tape_width * tapes

        croco_strand_area = np.pi / 4.0 * d**2
        croco_strand_critical_current = np.float64(jcritsc) * rebco_area

    return CrocoStrand(
        croco_id=float(croco_id),
        scaling=float(scaling),
        tape_width=float(tape_width),
        tape_thickness=float(tape_thickness),
        stack_thickness=float(stack_thickness),
        tapes=float(tapes),
        copper_area=float(copper_area),
        hastelloy_area=float(hastelloy_area),
        solder_area=float(solder_area),
        rebco_area=float(rebco_area),
        croco_strand_area=float(croco_strand_area),
        croco_strand_critical_current=float(croco_strand_critical_current),
    )


def evaluate_croco(
    jcritsc: float,
    croco_od: float,
    croco_thick: float,
    conductor_area: float,
    tape: TapeGeometry = _DEFAULT_TAPE,
    *,
    strands_per_cable: int = CROCO_STRANDS_PER_CABLE,
    reporter: Optional[Reporter] = None,
) -> CableAreaBreakdown:
    """
    Area and fraction breakdown of a CroCo cable.

    jcritsc: critical current density of the REBCO layer (A/m2)
    croco_od: strand outer diameter (m)
    croco_thick: copper tube wall thickness (m)
    conductor_area: cable cross-section the fractions refer to (m2)
    """
    strand = croco_strand(jcritsc, croco_od, croco_thick, tape, reporter=reporter)
    n = int(strands_per_cable)

    # Core bar has the area of one strand
    copper_bar_area = strand.croco_strand_area
    # Coolant channel is sized from the strand diameter, not from the tapes
    helium_area = np.pi / 2.0 * np.float64(croco_od) ** 2

    areas = {
        "copper": strand.copper_area * n + copper_bar_area,
        "hastelloy": strand.hastelloy_area * n,
        "helium": float(helium_area),
        "solder": strand.solder_area * n,
        "rebco": strand.rebco_area * n,
    }
    fractions = _fractions(areas, conductor_area)

    return CableAreaBreakdown(
        strand=strand,
        strands_per_cable=n,
        conductor_area=float(conductor_area),
        conductor_critical_current=strand.croco_strand_critical_current * n,
        conductor_copper_bar_area=copper_bar_area,
        conductor_copper_area=areas["copper"],
        conductor_copper_fraction=fractions["copper"],
        conductor_hastelloy_area=areas["hastelloy"],
        conductor_hastelloy_fraction=fractions["hastelloy"],
        conductor_helium_area=areas["helium"],
        conductor_helium_fraction=fractions["helium"],
        conductor_solder_area=areas["solder"],
        conductor_solder_fraction=fractions["solder"],
        conductor_rebco_area=areas["rebco"],
        conductor_rebco_fraction=fractions["rebco"],
    )


def evaluate_croco_self_consistent(
    jcritsc: float,
    croco_od: float,
    croco_thick: float,
    tape: TapeGeometry = _DEFAULT_TAPE,
    *,
    strands_per_cable: int = CROCO_STRANDS_PER_CABLE,
    reporter: Optional[Reporter] = None,
) -> CableAreaBreakdown:
    """Evaluate with ``conductor_area`` equal to the sum of the regional areas."""
    breakdown = evaluate_croco(
        jcritsc,
        croco_od,
        croco_thick,
        1.0,
        tape,
        strands_per_cable=strands_per_cable,
        reporter=reporter,
    )
    return breakdown.with_conductor_area(breakdown.total_regional_area)


def _fractions(areas: Dict[str, float], conductor_area: float) -> Dict[str, float]:
    total = np.float64(conductor_area)
    with np.errstate(divide="ignore", invalid="ignore"):
        return {name: float(np.float64(value) / total) for name, value in areas.items()}
