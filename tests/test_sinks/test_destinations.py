"""Tests for the built-in log destinations."""

from __future__ import annotations

import io
import logging

import pytest

from corelog.config import CoreLogConfig
from corelog.exceptions import DestinationError
from corelog.severity import NOTICE_LOGGING_LEVEL, Severity
from corelog.sinks.memory import MemoryDestination
from corelog.sinks.stdlib import StdlibLoggingDestination
from corelog.sinks.stream import StderrDestination


class TestStdlibLoggingDestination:
    def test_uses_configured_logger(self) -> None:
        config = CoreLogConfig(_env_file=None, system_logger_name="host.app")  # type: ignore[call-arg]
        destination = StdlibLoggingDestination(config)
        assert destination.logger.name == "host.app"
        assert destination.name == "logging"

    @pytest.mark.parametrize(
        ("severity", "level"),
        [
            (Severity.ERROR, logging.ERROR),
            (Severity.WARNING, logging.WARNING),
            (Severity.NOTICE, NOTICE_LOGGING_LEVEL),
            (Severity.INFO, logging.INFO),
            (Severity.DEBUG, logging.DEBUG),
        ],
    )
    def test_maps_levels(
        self,
        caplog: pytest.LogCaptureFixture,
        severity: Severity,
        level: int,
    ) -> None:
        destination = StdlibLoggingDestination()
        with caplog.at_level(logging.DEBUG, logger="corelog.system"):
            destination.write("a line", severity)
        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == level
        assert record.getMessage() == "a line"
        assert record.corelog_severity == int(severity)  # type: ignore[attr-defined]

    def test_percent_signs_not_interpolated(self, caplog: pytest.LogCaptureFixture) -> None:
        destination = StdlibLoggingDestination()
        with caplog.at_level(logging.DEBUG, logger="corelog.system"):
            destination.write("100% done %s", Severity.ERROR)
        assert caplog.records[0].getMessage() == "100% done %s"

    def test_default_threshold_admits_notice(
        self,
        config: CoreLogConfig,
        system_logger: logging.Logger,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        named = config.model_copy(update={"system_logger_name": system_logger.name})
        destination = StdlibLoggingDestination(named)
        destination.write("notice line", Severity.NOTICE)
        destination.write("info line", Severity.INFO)
        assert [r.getMessage() for r in caplog.records] == ["notice line"]

    def test_set_threshold_opens_logger(
        self,
        config: CoreLogConfig,
        system_logger: logging.Logger,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        named = config.model_copy(update={"system_logger_name": system_logger.name})
        destination = StdlibLoggingDestination(named)
        destination.set_threshold(Severity.DEBUG)
        destination.write("debug line", Severity.DEBUG)
        assert system_logger.level == logging.DEBUG
        assert [r.getMessage() for r in caplog.records] == ["debug line"]

    def test_writes_to_stderr_when_unconfigured(
        self,
        config: CoreLogConfig,
        system_logger: logging.Logger,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        system_logger.propagate = False
        named = config.model_copy(update={"system_logger_name": system_logger.name})
        destination = StdlibLoggingDestination(named)
        destination.set_threshold(Severity.DEBUG)
        destination.write("unrouted line", Severity.DEBUG)
        assert "<DEBUG> unrouted line" in capsys.readouterr().err

        destination.close()
        assert system_logger.handlers == []

    def test_host_handlers_left_alone(
        self,
        config: CoreLogConfig,
        system_logger: logging.Logger,
    ) -> None:
        host_handler = logging.NullHandler()
        system_logger.addHandler(host_handler)
        named = config.model_copy(update={"system_logger_name": system_logger.name})
        StdlibLoggingDestination(named).close()
        assert system_logger.handlers == [host_handler]


class TestStderrDestination:
    def test_writes_to_given_stream(self) -> None:
        stream = io.StringIO()
        StderrDestination(stream=stream).write("hello", Severity.WARNING)
        assert stream.getvalue() == "<Warning> hello\n"

    def test_defaults_to_sys_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        StderrDestination().write("to stderr", Severity.ERROR)
        assert capsys.readouterr().err == "<Error> to stderr\n"

    def test_closed_stream_raises_destination_error(self) -> None:
        stream = io.StringIO()
        stream.close()
        with pytest.raises(DestinationError):
            StderrDestination(stream=stream).write("x", Severity.ERROR)


class TestMemoryDestination:
    def test_records_in_order(self) -> None:
        destination = MemoryDestination()
        destination.write("one", Severity.ERROR)
        destination.write("two", Severity.DEBUG)
        assert destination.records == [(Severity.ERROR, "one"), (Severity.DEBUG, "two")]
        assert destination.lines == ["one", "two"]

    def test_records_is_copy(self) -> None:
        destination = MemoryDestination()
        destination.write("one", Severity.ERROR)
        destination.records.clear()
        assert destination.lines == ["one"]

    def test_clear(self) -> None:
        destination = MemoryDestination()
        destination.write("one", Severity.ERROR)
        destination.clear()
        assert destination.records == []
