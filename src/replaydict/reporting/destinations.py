"""Destinations receive measurements and export them somewhere."""

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from replaydict.reporting.measurement import Measurement


class ReportingError(Exception):
    """Raised when a destination cannot accept a measurement."""

    pass


class Destination(ABC):
    """Lifecycle: open(), zero or more report() calls, close()."""

    @abstractmethod
    def open(self) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        ...

    @abstractmethod
    def report(self, measurement: Measurement) -> None:
        ...


class ConsoleDestination(Destination):
    """Writes one rendered line per measurement to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream
        self._opened = False

    @property
    def opened(self) -> bool:
        return self._opened

    def open(self) -> None:
        self._opened = True

    def close(self) -> None:
        if self._opened:
            self.stream.flush()
        self._opened = False

    @property
    def stream(self) -> TextIO:
        # sys.stdout may be swapped after construction.
        return self._stream if self._stream is not None else sys.stdout

    def report(self, measurement: Measurement) -> None:
        if not self._opened:
            raise ReportingError("Destination is not open")
        print(str(measurement), file=self.stream)
