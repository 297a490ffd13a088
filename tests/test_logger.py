"""Tests for KeysmithLogger."""

from __future__ import annotations

import json

from shared.logger import KeysmithLogger


class TestFileLogging:
    def test_json_lines(self, tmp_path):
        path = tmp_path / "logs" / "keysmith.log"
        log = KeysmithLogger("file.json", log_file=path, json_logs=True, console_output=False)
        with log.operation("generate"):
            log.info("Generated %d passwords", 3, length=16)

        entry = json.loads(path.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert entry["message"] == "Generated 3 passwords"
        assert entry["component"] == "file.json"
        assert entry["operation"] == "generate"
        assert entry["extra"] == {"length": 16}

    def test_operation_scope_restored(self, tmp_path):
        path = tmp_path / "plain.log"
        log = KeysmithLogger("file.plain", log_file=path, json_logs=True, console_output=False)
        with log.operation("outer"):
            with log.operation("inner"):
                pass
            log.info("after inner")
        log.info("outside")

        lines = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
        assert lines[0]["operation"] == "outer"
        assert "operation" not in lines[1]

    def test_level_filtering(self, tmp_path):
        path = tmp_path / "warn.log"
        log = KeysmithLogger(
            "file.warn", log_level="WARNING", log_file=path, console_output=False
        )
        log.info("hidden")
        log.warning("shown")
        text = path.read_text(encoding="utf-8")
        assert "shown" in text and "hidden" not in text

    def test_timed_measures(self):
        log = KeysmithLogger("timed.test", console_output=False)
        with log.timed("block") as timer:
            pass
        assert timer.elapsed_ms >= 0.0
