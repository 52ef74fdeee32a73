"""Unit tests for the StatusRenderer."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel

from buildcast.models.coordinator import CoordinatorSnapshot, VisibleState
from buildcast.models.status import StatusAction, StatusMessage
from buildcast.monitor.renderer import StatusRenderer, _VISIBLE_STYLES, parse_status


def _render(renderable) -> str:
    console = Console(record=True, width=120)
    console.print(renderable)
    return console.export_text()


class TestParseStatus:
    def test_parses_status_dict(self):
        status = parse_status({"action": "sync", "hash": "A", "warnings": [], "errors": []})
        assert status == StatusMessage(action=StatusAction.SYNC, hash="A")

    def test_other_payloads_are_not_status(self):
        assert parse_status({"event": "reload"}) is None
        assert parse_status(["building"]) is None
        assert parse_status({"action": "reload"}) is None

    def test_malformed_status_is_not_status(self):
        assert parse_status({"action": "built", "errors": "not-a-list"}) is None


class TestRenderMessage:
    def test_building(self):
        text = StatusRenderer().render_message({"action": "building"})
        assert text.plain == "BUILDING"

    def test_built_with_diagnostics(self):
        text = StatusRenderer().render_message(
            StatusMessage(action=StatusAction.BUILT, hash="A", warnings=["W"], errors=["E"]),
            source="live",
        )
        assert text.plain.splitlines() == [
            "live BUILT A 1 error(s) 1 warning(s)",
            "  error: E",
            "  warning: W",
        ]

    def test_markup_in_payload_is_not_interpreted(self):
        text = StatusRenderer().render_message({"event": "[bold]x[/bold]"})
        assert "[bold]x[/bold]" in text.plain


class TestRenderSnapshot:
    def test_returns_panel(self):
        panel = StatusRenderer().render_snapshot(CoordinatorSnapshot(visible=VisibleState.IDLE))
        assert isinstance(panel, Panel)

    def test_snapshot_contents(self):
        snap = CoordinatorSnapshot(
            visible=VisibleState.SERVER_ERROR,
            latest_hash="abc123",
            latest_error_count=1,
            server_has_error=True,
            listener_count=3,
            broadcast_count=7,
        )
        output = _render(StatusRenderer().render_snapshot(snap))
        assert "SERVER_ERROR" in output
        assert "abc123" in output
        assert "yes" in output
        assert "accepting events" in output

    def test_closed_snapshot(self):
        output = _render(
            StatusRenderer().render_snapshot(
                CoordinatorSnapshot(visible=VisibleState.BUILT, closed=True)
            )
        )
        assert "CLOSED" in output

    def test_every_state_has_a_style(self):
        assert set(_VISIBLE_STYLES) == set(VisibleState)
