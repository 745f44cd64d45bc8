"""Reporting collaborators: metric accumulators and measurement destinations."""

from replaydict.reporting.accumulators import Accumulator, MinAccumulator, SumAccumulator
from replaydict.reporting.destinations import ConsoleDestination, Destination, ReportingError
from replaydict.reporting.measurement import Measurement

__all__ = [
    "Accumulator",
    "ConsoleDestination",
    "Destination",
    "Measurement",
    "MinAccumulator",
    "ReportingError",
    "SumAccumulator",
]
