"""Measurement model passed from reporters to destinations."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

DEFAULT_RESULT = "Result"


class Measurement(BaseModel):
    """A snapshot of aggregated results at one point of a test run."""
    percentage: int  # progress of the run, 0-100
    time: int  # milliseconds since the run started
    iteration: int
    results: Dict[str, Any] = Field(default_factory=dict)

    def get(self, name: Optional[str] = None) -> Any:
        return self.results.get(name or DEFAULT_RESULT)

    def set(self, value: Any, name: Optional[str] = None) -> None:
        self.results[name or DEFAULT_RESULT] = value

    def __str__(self) -> str:
        seconds = self.time // 1000
        hours, rest = divmod(seconds, 3600)
        minutes, seconds = divmod(rest, 60)
        parts = [f"[{hours}:{minutes:02d}:{seconds:02d}][{self.iteration} iterations][{self.percentage}%]"]
        for name in sorted(self.results):
            parts.append(f"[{name} => {self.results[name]}]")
        return " ".join(parts)
