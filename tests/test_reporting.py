"""Tests for Measurement and destinations."""

import io

import pytest

from replaydict.reporting import ConsoleDestination, Destination, Measurement, ReportingError


class TestMeasurement:

    def test_default_result(self):
        m = Measurement(percentage=50, time=1000, iteration=10)
        m.set(3.5)
        assert m.get() == 3.5
        assert m.results == {"Result": 3.5}

    def test_named_result(self):
        m = Measurement(percentage=50, time=1000, iteration=10)
        m.set(7, "throughput")
        assert m.get("throughput") == 7
        assert m.get() is None

    def test_str(self):
        m = Measurement(percentage=25, time=3_723_000, iteration=42, results={"b": 2, "a": 1})
        assert str(m) == "[1:02:03][42 iterations][25%] [a => 1] [b => 2]"


class TestConsoleDestination:

    def test_lifecycle(self):
        stream = io.StringIO()
        destination = ConsoleDestination(stream)
        destination.open()
        destination.report(Measurement(percentage=100, time=0, iteration=1, results={"Result": 1}))
        destination.report(Measurement(percentage=100, time=0, iteration=2, results={"Result": 2}))
        destination.close()
        assert stream.getvalue().splitlines() == [
            "[0:00:00][1 iterations][100%] [Result => 1]",
            "[0:00:00][2 iterations][100%] [Result => 2]",
        ]

    def test_report_before_open_raises(self):
        destination = ConsoleDestination(io.StringIO())
        with pytest.raises(ReportingError):
            destination.report(Measurement(percentage=0, time=0, iteration=0))

    def test_report_after_close_raises(self):
        destination = ConsoleDestination(io.StringIO())
        destination.open()
        destination.close()
        assert destination.opened is False
        with pytest.raises(ReportingError):
            destination.report(Measurement(percentage=0, time=0, iteration=0))

    def test_defaults_to_stdout(self, capsys):
        destination = ConsoleDestination()
        destination.open()
        destination.report(Measurement(percentage=10, time=0, iteration=1))
        destination.close()
        assert capsys.readouterr().out == "[0:00:00][1 iterations][10%]\n"


def test_destination_is_abstract():
    with pytest.raises(TypeError):
        Destination()
