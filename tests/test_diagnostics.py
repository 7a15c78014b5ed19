from __future__ import annotations

import logging

import pytest

from scpn_superconductors.core.diagnostics import (
    CriticalSurfaceNaNError,
    DiagnosticCode,
    DiagnosticCollector,
    DiagnosticEvent,
    emit,
    log_diagnostic,
)


def test_wst_error_codes_are_stable() -> None:
    assert DiagnosticCode.REDUCED_TEMPERATURE == 159
    assert DiagnosticCode.REDUCED_FIELD_AT_ZERO_TEMPERATURE == 160
    assert DiagnosticCode.REDUCED_FIELD == 161


def test_event_fills_default_message_and_serializes() -> None:
    event = DiagnosticEvent(DiagnosticCode.REDUCED_FIELD, 14.0, 12.5)
    assert "bmax/bcrit" in event.message
    payload = event.as_dict()
    assert payload == {
        "code": 161,
        "name": "REDUCED_FIELD",
        "value1": 14.0,
        "value2": 12.5,
        "message": event.message,
    }


def test_event_keeps_custom_message() -> None:
    event = DiagnosticEvent(DiagnosticCode.INVALID_INNER_DIAMETER, -1.0, 2.0, message="custom")
    assert event.message == "custom"


def test_collector_accumulates_and_clears() -> None:
    collector = DiagnosticCollector(log_events=False)
    emit(collector, DiagnosticCode.REDUCED_TEMPERATURE, 17.0, 16.06)
    emit(collector, DiagnosticCode.REDUCED_FIELD, 30.0, 28.0)

    assert collector.codes() == [DiagnosticCode.REDUCED_TEMPERATURE, DiagnosticCode.REDUCED_FIELD]
    assert collector.has(DiagnosticCode.REDUCED_FIELD)
    assert not collector.has(DiagnosticCode.NEGATIVE_STRAIN_FUNCTION)
    collector.clear()
    assert collector.events == []


def test_custom_callable_reporter_receives_event() -> None:
    seen: list[DiagnosticEvent] = []
    returned = emit(seen.append, DiagnosticCode.NEGATIVE_STRAIN_FUNCTION, -0.2, 0.03)
    assert seen == [returned]
    assert returned.value1 == pytest.approx(-0.2)


def test_log_diagnostic_attaches_physics_context(caplog) -> None:
    event = DiagnosticEvent(DiagnosticCode.REDUCED_TEMPERATURE, 17.0, 16.06)
    with caplog.at_level(logging.WARNING, logger="scpn_superconductors"):
        log_diagnostic(event)
    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.WARNING
    assert "code=159" in record.getMessage()
    assert record.physics_context["value2"] == pytest.approx(16.06)


def test_emit_without_reporter_logs(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="scpn_superconductors"):
        emit(None, DiagnosticCode.INVALID_INNER_DIAMETER, -1e-4, 6e-4)
    assert any("CroCo" in r.getMessage() for r in caplog.records)


def test_collector_can_log_as_well(caplog) -> None:
    collector = DiagnosticCollector()
    with caplog.at_level(logging.WARNING, logger="scpn_superconductors"):
        emit(collector, DiagnosticCode.REDUCED_FIELD, 30.0, 28.0)
    assert len(collector.events) == 1
    assert len(caplog.records) == 1


def test_nan_error_dump_lists_context_in_order() -> None:
    err = CriticalSurfaceNaNError("jc3", {"bred": float("nan"), "bmax": 12.0, "bcrit": 0.0, "t": 1.0})
    dump = err.format_dump()
    assert dump.startswith("jc3 is NaN.")
    assert dump.index("bred=") < dump.index("bmax=") < dump.index("bcrit=") < dump.index("t=")
    assert isinstance(err, RuntimeError)
    assert str(err) == dump
