# ──────────────────────────────────────────────────────────────────────
# SCPN Superconductors — Command Line Interface
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, List, Optional

import click
from pydantic import ValidationError

from scpn_superconductors.core.config_schema import (
    CROCO_STRANDS_PER_CABLE,
    CrocoCableDesign,
    SuperconductorConfig,
    TapeGeometry,
    WSTMaterial,
    load_config,
)
from scpn_superconductors.core.croco_cable import (
    CableAreaBreakdown,
    evaluate_croco,
    evaluate_croco_self_consistent,
)
from scpn_superconductors.core.diagnostics import CriticalSurfaceNaNError, DiagnosticCollector
from scpn_superconductors.core.wst_nb3sn import WST_BC20MAX_T, WST_TC0MAX_K, evaluate_wst
from scpn_superconductors.io.logging_config import setup_superconductor_logging


LOGGER = logging.getLogger("scpn_superconductors.cli")

FATAL_EXIT_CODE = 1


def _configure_logging(level: str, json_logs: bool) -> None:
    setup_superconductor_logging(
        level=getattr(logging, level.upper(), logging.INFO),
        json_output=json_logs,
    )


def _fatal(exc: CriticalSurfaceNaNError) -> None:
    LOGGER.error("Unrecoverable critical-surface evaluation: %s", exc.label)
    click.echo(exc.format_dump(), err=True)
    click.get_current_context().exit(FATAL_EXIT_CODE)


def _validation_error(exc: ValidationError) -> click.ClickException:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return click.ClickException(f"Invalid input: {problems}")


def _wst_payload(
    temperature: float,
    bmax: float,
    strain: float,
    material: WSTMaterial,
) -> Dict[str, Any]:
    collector = DiagnosticCollector()
    jcrit, bcrit, tcrit = evaluate_wst(
        temperature,
        bmax,
        strain,
        material.bc20max,
        material.tc0max,
        reporter=collector,
    )
    return {
        "inputs": {
            "temperature": temperature,
            "bmax": bmax,
            "strain": strain,
            "bc20max": material.bc20max,
            "tc0max": material.tc0max,
        },
        "jcrit": jcrit,
        "bcrit": bcrit,
        "tcrit": tcrit,
        "diagnostics": [event.as_dict() for event in collector.events],
    }


def _evaluate_design(
    design: CrocoCableDesign,
    collector: DiagnosticCollector,
) -> CableAreaBreakdown:
    if design.conductor_area is None:
        return evaluate_croco_self_consistent(
            design.jcritsc,
            design.croco_od,
            design.croco_thick,
            design.tape,
            strands_per_cable=design.strands_per_cable,
            reporter=collector,
        )
    return evaluate_croco(
        design.jcritsc,
        design.croco_od,
        design.croco_thick,
        design.conductor_area,
        design.tape,
        strands_per_cable=design.strands_per_cable,
        reporter=collector,
    )


def _croco_payload(res: CableAreaBreakdown, collector: DiagnosticCollector) -> Dict[str, Any]:
    payload = res.as_dict()
    payload["fraction_sum"] = res.fraction_sum
    payload["diagnostics"] = [event.as_dict() for event in collector.events]
    return payload


def _echo_wst(payload: Dict[str, Any]) -> None:
    click.echo(f"jcrit = {payload['jcrit']:.4e} A/m2")
    click.echo(f"bcrit = {payload['bcrit']:.4f} T")
    click.echo(f"tcrit = {payload['tcrit']:.4f} K")
    for diag in payload["diagnostics"]:
        click.echo(f"warning [{diag['code']}] {diag['message']}")


def _echo_croco(res: CableAreaBreakdown) -> None:
    strand = res.strand
    click.echo(f"croco_id = {strand.croco_id * 1e3:.4f} mm, tape width = {strand.tape_width * 1e3:.4f} mm")
    click.echo(f"tapes per strand = {strand.tapes:.2f}")
    click.echo(f"strand Ic = {strand.croco_strand_critical_current:.4e} A")
    click.echo(f"cable Ic = {res.conductor_critical_current:.4e} A ({res.strands_per_cable} strands)")
    click.echo("region | area (mm2) | fraction")
    for region in ("copper", "hastelloy", "helium", "solder", "rebco"):
        area = getattr(res, f"conductor_{region}_area")
        fraction = getattr(res, f"conductor_{region}_fraction")
        click.echo(f"{region} | {area * 1e6:.4f} | {fraction:.4f}")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level.",
)
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines.")
def cli(log_level: str, json_logs: bool) -> None:
    """Superconductor critical-surface and CroCo cable evaluators."""
    _configure_logging(log_level, json_logs)


@cli.command("wst")
@click.option("--temperature", required=True, type=float, help="Conductor temperature (K).")
@click.option("--bmax", required=True, type=float, help="Peak field at the conductor (T).")
@click.option("--strain", default=0.0, show_default=True, type=float, help="Strain in the superconductor.")
@click.option("--bc20max", default=WST_BC20MAX_T, show_default=True, type=float, help="Bc20 at zero T and strain (T).")
@click.option("--tc0max", default=WST_TC0MAX_K, show_default=True, type=float, help="Tc0 at zero field and strain (K).")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def wst_command(
    temperature: float,
    bmax: float,
    strain: float,
    bc20max: float,
    tc0max: float,
    as_json: bool,
) -> None:
    """WST Nb3Sn critical current density, field and temperature."""
    try:
        material = WSTMaterial(bc20max=bc20max, tc0max=tc0max)
    except ValidationError as exc:
        raise _validation_error(exc) from exc
    try:
        payload = _wst_payload(temperature, bmax, strain, material)
    except CriticalSurfaceNaNError as exc:
        _fatal(exc)
        return
    if as_json:
        click.echo(json.dumps(payload, indent=2))
    else:
        _echo_wst(payload)


@cli.command("croco")
@click.option("--jcritsc", required=True, type=float, help="REBCO critical current density (A/m2).")
@click.option("--croco-od", required=True, type=float, help="Strand outer diameter (m).")
@click.option("--croco-thick", required=True, type=float, help="Copper tube wall thickness (m).")
@click.option(
    "--conductor-area",
    default=None,
    type=float,
    help="Conductor cross-section (m2). Defaults to the sum of the regional areas.",
)
@click.option("--strands", default=CROCO_STRANDS_PER_CABLE, show_default=True, type=int, help="Strands per cable.")
@click.option("--rebco-thickness", default=TapeGeometry().rebco_thickness, show_default=True, type=float)
@click.option("--copper-thickness", default=TapeGeometry().copper_thickness, show_default=True, type=float)
@click.option("--hastelloy-thickness", default=TapeGeometry().hastelloy_thickness, show_default=True, type=float)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def croco_command(
    jcritsc: float,
    croco_od: float,
    croco_thick: float,
    conductor_area: Optional[float],
    strands: int,
    rebco_thickness: float,
    copper_thickness: float,
    hastelloy_thickness: float,
    as_json: bool,
) -> None:
    """CroCo REBCO cable area breakdown and critical current."""
    try:
        design = CrocoCableDesign(
            jcritsc=jcritsc,
            croco_od=croco_od,
            croco_thick=croco_thick,
            conductor_area=conductor_area,
            strands_per_cable=strands,
            tape=TapeGeometry(
                rebco_thickness=rebco_thickness,
                copper_thickness=copper_thickness,
                hastelloy_thickness=hastelloy_thickness,
            ),
        )
    except ValidationError as exc:
        raise _validation_error(exc) from exc

    collector = DiagnosticCollector()
    res = _evaluate_design(design, collector)
    if as_json:
        click.echo(json.dumps(_croco_payload(res, collector), indent=2))
        return
    _echo_croco(res)
    for event in collector.events:
        click.echo(f"warning [{int(event.code)}] {event.message}")


@cli.command("config")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def config_command(path: str) -> None:
    """Evaluate every block of a JSON design-point file."""
    try:
        cfg: SuperconductorConfig = load_config(path)
    except ValidationError as exc:
        raise _validation_error(exc) from exc
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Malformed JSON in {path}: {exc}") from exc

    out: Dict[str, Any] = {"name": cfg.name}
    evaluated: List[str] = []
    if cfg.operating_point is not None:
        op = cfg.operating_point
        try:
            out["wst"] = _wst_payload(op.temperature, op.bmax, op.strain, cfg.wst)
        except CriticalSurfaceNaNError as exc:
            _fatal(exc)
            return
        evaluated.append("wst")
    if cfg.croco is not None:
        collector = DiagnosticCollector()
        out["croco"] = _croco_payload(_evaluate_design(cfg.croco, collector), collector)
        evaluated.append("croco")
    if not evaluated:
        raise click.ClickException("Config has neither an operating_point nor a croco block.")
    LOGGER.info("Evaluated %s for %s", ", ".join(evaluated), cfg.name)
    click.echo(json.dumps(out, indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    try:
        # Without standalone mode ctx.exit(code) comes back as the return value
        result = cli.main(args=argv, standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        return code
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
