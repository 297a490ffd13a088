"""Tests for the timing and event-tracking decorators."""

from __future__ import annotations

import logging

from shared.logger import KeysmithLogger

from keysmith.core.instrumentation import LoggingEventTracker, timed, tracked


class ListTracker:
    def __init__(self):
        self.events = []

    def track(self, event, properties):
        self.events.append((event, properties))


class TestTracked:
    def test_emits_event_and_returns_value(self):
        tracker = ListTracker()

        @tracked(tracker, "doubled", lambda x: {"x": x})
        def double(x):
            return 2 * x

        assert double(4) == 8
        assert tracker.events == [("doubled", {"x": 4})]

    def test_none_properties_skip_event(self):
        tracker = ListTracker()
        wrapped = tracked(tracker, "ignored", lambda x: None)(str.upper)
        assert wrapped("a") == "A"
        assert tracker.events == []

    def test_default_properties(self):
        tracker = ListTracker()
        tracked(tracker, "called")(len)("abc")
        assert tracker.events == [("called", {})]

    def test_preserves_metadata(self):
        def original():
            """Docstring."""

        wrapped = tracked(ListTracker(), "e")(original)
        assert wrapped.__name__ == "original"
        assert wrapped.__doc__ == "Docstring."


class TestTimed:
    def test_logs_completion(self, caplog):
        log = KeysmithLogger("instrumentation.test", console_output=False)
        log.underlying.propagate = True

        @timed(log, "work")
        def work():
            return "done"

        with caplog.at_level(logging.INFO, logger="keysmith.instrumentation.test"):
            assert work() == "done"
        assert any("Completed: work" in r.getMessage() for r in caplog.records)

    def test_level_is_configurable(self, caplog):
        log = KeysmithLogger("instrumentation.debug", log_level="DEBUG", console_output=False)
        log.underlying.propagate = True

        with caplog.at_level(logging.DEBUG, logger="keysmith.instrumentation.debug"):
            timed(log, "quiet work", "DEBUG")(lambda: None)()
        done = [r for r in caplog.records if "Completed: quiet work" in r.getMessage()]
        assert done and done[0].levelno == logging.DEBUG


class TestLoggingEventTracker:
    def test_logs_event(self, caplog):
        log = KeysmithLogger("tracker.test", log_level="DEBUG", console_output=False)
        log.underlying.propagate = True

        with caplog.at_level(logging.DEBUG, logger="keysmith.tracker.test"):
            LoggingEventTracker(log).track("password_generated", {"length": 16})
        record = caplog.records[-1]
        assert record.getMessage() == "Event: password_generated"
        assert record.keysmith_extra["properties"] == {"length": 16}
