"""Tests for the bundled listener transports and wire encoding."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from rich.console import Console

from buildcast.core.wire import decode, encode
from buildcast.listeners import Listener, ListenerClosedError
from buildcast.listeners.console import ConsoleListener
from buildcast.listeners.jsonl_file import JsonlFileListener
from buildcast.listeners.memory import MemoryListener
from buildcast.models.coordinator import CoordinatorSnapshot, VisibleState
from buildcast.models.status import BUILDING


class TestWire:
    def test_encode_status_message(self):
        assert encode(BUILDING) == '{"action":"building"}'

    def test_encode_other_models(self):
        data = decode(encode(CoordinatorSnapshot(visible=VisibleState.BUILT)))
        assert data["visible"] == "built"

    def test_encode_plain_payload_verbatim(self):
        payload = {"event": "reload", "pages": ["/a", "/b"]}
        assert decode(encode(payload)) == payload

    def test_decode_bytes(self):
        assert decode(b'{"a": 1}') == {"a": 1}


class TestMemoryListener:
    def test_satisfies_protocol(self):
        assert isinstance(MemoryListener(), Listener)

    def test_records_messages(self):
        listener = MemoryListener()
        listener.send('{"a":1}')
        assert listener.messages == ['{"a":1}']
        assert listener.decoded() == [{"a": 1}]

    def test_send_after_close_raises(self):
        listener = MemoryListener()
        listener.close()
        with pytest.raises(ListenerClosedError):
            listener.send("{}")

    def test_close_callbacks_fire_once(self):
        listener = MemoryListener()
        calls: list[str] = []
        listener.on_close(lambda: calls.append("closed"))
        listener.close()
        listener.close()
        assert calls == ["closed"]

    def test_on_close_after_close_fires_immediately(self):
        listener = MemoryListener()
        listener.close()
        calls: list[str] = []
        listener.on_close(lambda: calls.append("closed"))
        assert calls == ["closed"]

    def test_failing_close_callback_does_not_stop_others(self):
        listener = MemoryListener()
        calls: list[str] = []

        def boom() -> None:
            raise RuntimeError("boom")

        listener.on_close(boom)
        listener.on_close(lambda: calls.append("second"))
        listener.close()
        assert calls == ["second"]


class TestJsonlFileListener:
    def test_appends_one_line_per_message(self, tmp_path: Path):
        path = tmp_path / "events" / "status.jsonl"
        listener = JsonlFileListener(path)
        listener.send(encode(BUILDING))
        listener.send(encode({"event": "reload"}))
        listener.close()

        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line) for line in lines] == [
            {"action": "building"},
            {"event": "reload"},
        ]

    def test_send_after_close_raises(self, tmp_path: Path):
        listener = JsonlFileListener(tmp_path / "status.jsonl")
        listener.close()
        with pytest.raises(ListenerClosedError):
            listener.send("{}")


class TestConsoleListener:
    def test_prints_status(self):
        console = Console(record=True, width=120)
        listener = ConsoleListener(console=console, name="live")
        listener.send('{"action":"built","hash":"abc","warnings":[],"errors":["E1"]}')
        output = console.export_text()
        assert "live" in output
        assert "BUILT" in output
        assert "abc" in output
        assert "error: E1" in output

    def test_prints_published_payload(self):
        console = Console(record=True, width=120)
        listener = ConsoleListener(console=console)
        listener.send('{"event":"reload"}')
        assert "PUBLISH" in console.export_text()
