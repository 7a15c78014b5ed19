from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from scpn_superconductors.core.config_schema import WSTMaterial
from scpn_superconductors.core.critical_surface_scan import (
    CROCO_SCAN_COLUMNS,
    WST_FIELD_SCAN_COLUMNS,
    WSTSurfaceGrid,
    plot_critical_surface,
    scan_croco_diameter,
    scan_wst_field,
    scan_wst_grid,
    wst_current_sharing_temperature,
)
from scpn_superconductors.core.diagnostics import DiagnosticCode, DiagnosticCollector
from scpn_superconductors.core.wst_nb3sn import evaluate_wst


def test_grid_matches_pointwise_evaluation() -> None:
    temps = [4.2, 8.0]
    fields = [5.0, 12.0, 20.0]
    grid = scan_wst_grid(temps, fields, strain=-0.002)

    assert isinstance(grid, WSTSurfaceGrid)
    assert grid.jcrit.shape == (2, 3)
    ref = evaluate_wst(8.0, 12.0, -0.002, reporter=DiagnosticCollector(log_events=False))
    assert grid.jcrit[1, 1] == pytest.approx(ref.jcrit)
    assert grid.bcrit[1, 1] == pytest.approx(ref.bcrit)
    assert grid.tcrit[1, 1] == pytest.approx(ref.tcrit)
    assert grid.events == ()


def test_grid_collects_out_of_range_events_without_logging(caplog) -> None:
    with caplog.at_level("WARNING", logger="scpn_superconductors"):
        grid = scan_wst_grid([4.2, 17.0], [12.0])
    assert [e.code for e in grid.events] == [DiagnosticCode.REDUCED_TEMPERATURE]
    assert not [r for r in caplog.records if r.levelname == "WARNING"]


def test_grid_rejects_empty_or_nonfinite_axes() -> None:
    with pytest.raises(ValueError, match="temperatures"):
        scan_wst_grid([], [12.0])
    with pytest.raises(ValueError, match="fields"):
        scan_wst_grid([4.2], [np.nan])


def test_field_scan_dataframe() -> None:
    fields = np.linspace(2.0, 32.0, 16)
    df = scan_wst_field(fields, temperature=4.2)

    assert list(df.columns) == WST_FIELD_SCAN_COLUMNS
    assert len(df) == 16
    valid = df[df["in_valid_domain"]]
    assert len(valid) > 0
    assert np.all(np.diff(valid["jcrit"].to_numpy()) < 0.0)
    # Fields above bcrit leave the valid domain
    assert not df.iloc[-1]["in_valid_domain"]


def test_current_sharing_temperature_hits_operating_current() -> None:
    j_ref = evaluate_wst(4.2, 12.0, 0.0, reporter=DiagnosticCollector(log_events=False)).jcrit
    jop = 0.5 * j_ref
    tcs = wst_current_sharing_temperature(jop, 12.0)

    assert 4.2 < tcs < 12.0
    j_at_tcs = evaluate_wst(tcs, 12.0, 0.0, reporter=DiagnosticCollector(log_events=False)).jcrit
    assert j_at_tcs == pytest.approx(jop, rel=1e-4)


def test_current_sharing_temperature_drops_with_strain() -> None:
    jop = 2.0e8
    relaxed = wst_current_sharing_temperature(jop, 12.0, 0.0)
    strained = wst_current_sharing_temperature(jop, 12.0, -0.004)
    assert strained < relaxed


def test_current_sharing_temperature_uses_material() -> None:
    jop = 2.0e8
    weak = wst_current_sharing_temperature(jop, 12.0, material=WSTMaterial(bc20max=28.0, tc0max=15.0))
    nominal = wst_current_sharing_temperature(jop, 12.0)
    assert weak < nominal


@pytest.mark.parametrize(
    ("jop", "bmax", "match"),
    [
        (0.0, 12.0, "jop"),
        (-1.0, 12.0, "jop"),
        (1.0e13, 12.0, "exceeds jcrit"),
        (1.0e8, 40.0, "Bc20"),
        (1.0e8, 0.0, "bmax"),
        (1.0e8, -2.0, "bmax"),
        (1.0e8, float("nan"), "bmax"),
    ],
)
def test_current_sharing_temperature_rejects_unreachable_points(jop: float, bmax: float, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        wst_current_sharing_temperature(jop, bmax)


def test_croco_diameter_scan_keeps_fractions() -> None:
    ods = [3.2e-3, 6.4e-3, 12.8e-3]
    df = scan_croco_diameter(1.0e10, ods)

    assert list(df.columns) == CROCO_SCAN_COLUMNS
    assert df["tapes"].to_numpy() == pytest.approx(
        df["tapes"].iloc[0] * np.array([1.0, 2.0, 4.0]), rel=1e-9
    )
    for region in ("copper", "hastelloy", "helium", "solder", "rebco"):
        col = df[f"conductor_{region}_fraction"].to_numpy()
        assert col == pytest.approx(np.full(3, col[0]), rel=1e-9)
    fraction_sum = df[[c for c in df.columns if c.endswith("_fraction")]].sum(axis=1).to_numpy()
    assert fraction_sum == pytest.approx(np.ones(3), rel=1e-9)
    assert df["croco_thick"].iloc[1] == pytest.approx(0.5e-3)


def test_croco_diameter_scan_rejects_bad_ratio() -> None:
    with pytest.raises(ValueError, match="thickness_ratio"):
        scan_croco_diameter(1.0e10, [6.4e-3], thickness_ratio=0.5)


def test_plot_critical_surface_returns_figure() -> None:
    grid = scan_wst_grid([4.2, 8.0], np.linspace(2.0, 20.0, 10))
    fig = plot_critical_surface(grid)
    assert fig is not None
    assert len(fig.axes) == 1
    assert len(fig.axes[0].lines) == 2
    plt.close(fig)
