"""Tests for geoview_render.logging (structured JSON records)."""

import json
import logging

from geoview_render.logging import LogEvent, StructuredLogger, create_logger
from geoview_render.logging.events import ERROR_EVENTS, RENDER_EVENTS


def json_records(caplog, logger_name: str) -> list:
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == logger_name]


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_info_record(self, caplog):
        slog = StructuredLogger(component="render_loop")
        with caplog.at_level(logging.INFO):
            slog.info(
                event=LogEvent.SCENE_LOADED,
                message="Scene loaded",
                metadata={"features": 3},
            )

        (entry,) = json_records(caplog, "geoview_render.render_loop")
        assert entry["level"] == "INFO"
        assert entry["component"] == "render_loop"
        assert entry["event"] == "scene.loaded"
        assert entry["metadata"] == {"features": 3}
        assert "timestamp" in entry

    def test_debug_filtered_at_info(self, caplog):
        slog = create_logger("quiet")
        with caplog.at_level(logging.DEBUG):
            slog.debug(event=LogEvent.RENDER_FRAME_DRAWN, message="Frame drawn")

        assert json_records(caplog, "geoview_render.quiet") == []

    def test_error_carries_exception(self, caplog):
        slog = create_logger("errors", level=logging.DEBUG)
        with caplog.at_level(logging.DEBUG):
            slog.error(event=LogEvent.FRAME_ERROR, message="Frame failed", exc_info=ValueError("boom"))

        (entry,) = json_records(caplog, "geoview_render.errors")
        assert entry["exception"] == {"type": "ValueError", "message": "boom"}

    def test_thread_and_record_event(self, caplog):
        slog = create_logger("threads")
        with caplog.at_level(logging.INFO):
            slog.warning(event=LogEvent.RENDER_FRAME_SKIPPED, message="Skipped")

        (record,) = [r for r in caplog.records if r.name == "geoview_render.threads"]
        assert record.event == "render.frame.skipped"
        assert json.loads(record.getMessage())["thread"] == "MainThread"

    def test_bound_context(self, caplog):
        slog = create_logger("bound", surface="640x480")
        child = slog.bind(scale=2.0)
        with caplog.at_level(logging.INFO):
            child.info(event=LogEvent.INPUT_TAP, message="Tap")
            slog.info(event=LogEvent.INPUT_TAP, message="Tap")

        bound, parent = json_records(caplog, "geoview_render.bound")
        assert bound["context"] == {"surface": "640x480", "scale": 2.0}
        assert parent["context"] == {"surface": "640x480"}

    def test_event_categories(self):
        assert LogEvent.RENDER_FRAME_SKIPPED in RENDER_EVENTS
        assert LogEvent.LOAD_WHILE_RUNNING in ERROR_EVENTS
        assert not RENDER_EVENTS & ERROR_EVENTS
