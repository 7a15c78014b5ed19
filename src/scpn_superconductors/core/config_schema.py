# ─────────────────────────────────────────────────────────────────────
# SCPN Superconductors — Configuration Schema
# © 1998–2026 Miroslav Šotek. All rights reserved.
# ─────────────────────────────────────────────────────────────────────
"""
Strict schema validation for superconductor design points using Pydantic.
Catches malformed material constants and cable geometry before evaluation.
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator, ConfigDict

from scpn_superconductors.core.wst_nb3sn import WST_BC20MAX_T, WST_TC0MAX_K

# All models use extra='allow' so that extension keys (notes, provenance,
# optimiser bookkeeping) pass through validation instead of being dropped.
# croco_thick is not cross-checked against croco_od: an inner diameter
# <= 0 is reported by the evaluator, not rejected here.

CROCO_STRANDS_PER_CABLE = 6


class WSTMaterial(BaseModel):
    model_config = ConfigDict(extra='allow')
    bc20max: float = Field(default=WST_BC20MAX_T, gt=0)
    tc0max: float = Field(default=WST_TC0MAX_K, gt=0)


class WSTOperatingPoint(BaseModel):
    model_config = ConfigDict(extra='allow')
    temperature: float = Field(..., ge=0)
    bmax: float
    strain: float = 0.0


class TapeGeometry(BaseModel):
    """Layer thicknesses (m) of one REBCO tape."""
    model_config = ConfigDict(extra='allow', frozen=True)
    rebco_thickness: float = Field(default=1.0e-6, gt=0)
    copper_thickness: float = Field(default=100.0e-6, gt=0)
    hastelloy_thickness: float = Field(default=50.0e-6, gt=0)

    @property
    def total_thickness(self) -> float:
        return self.rebco_thickness + self.copper_thickness + self.hastelloy_thickness


class CrocoCableDesign(BaseModel):
    model_config = ConfigDict(extra='allow')
    jcritsc: float = Field(..., ge=0)
    croco_od: float = Field(..., gt=0)
    croco_thick: float = Field(..., gt=0)
    conductor_area: Optional[float] = Field(default=None, gt=0)
    strands_per_cable: int = Field(default=CROCO_STRANDS_PER_CABLE, ge=1)
    tape: TapeGeometry = Field(default_factory=TapeGeometry)


class SuperconductorConfig(BaseModel):
    model_config = ConfigDict(extra='allow')

    name: str = "Unnamed-Conductor"
    wst: WSTMaterial = Field(default_factory=WSTMaterial)
    operating_point: Optional[WSTOperatingPoint] = None
    croco: Optional[CrocoCableDesign] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str):
        if not v.strip():
            raise ValueError("name must not be blank")
        return v


def validate_config(config_dict: dict) -> SuperconductorConfig:
    """Validate a raw configuration dictionary and return a validated SuperconductorConfig."""
    return SuperconductorConfig.model_validate(config_dict)


def load_config(path: Union[str, Path]) -> SuperconductorConfig:
    """Read a JSON design-point file and validate it."""
    with Path(path).open("r", encoding="utf-8") as handle:
        return validate_config(json.load(handle))
