"""Throughput sentinels for record and validate passes (bench command, perf tests)."""

from __future__ import annotations

import os
from pathlib import Path
from time import perf_counter

from replaydict.contracts import Message
from replaydict.reporting.accumulators import MinAccumulator, SumAccumulator
from replaydict.reporting.destinations import Destination
from replaydict.reporting.measurement import Measurement
from replaydict.validator import DictionaryValidator


def _budget_from_env(var_name: str, default_ms: float) -> float:
    raw = os.getenv(var_name)
    if not raw:
        return default_ms
    try:
        return float(raw)
    except ValueError:
        return default_ms


MAX_RECORD_PASS_MS = _budget_from_env("REPLAYDICT_MAX_RECORD_PASS_MS", 2000.0)
MAX_VALIDATE_PASS_MS = _budget_from_env("REPLAYDICT_MAX_VALIDATE_PASS_MS", 2000.0)

DEFAULT_MESSAGE_COUNT = 500


def sample_pair(i: int) -> tuple[Message, Message]:
    """Deterministic (original, response) pair; payloads use both index delimiters."""
    original = Message(payload=f"GET /item?id={i}&mode=a:b")
    response = Message(payload=f'{{"id": {i}, "status": "ok"}}')
    return original, response


def _run_pass(validator: DictionaryValidator, count: int) -> Measurement:
    total = SumAccumulator()
    fastest = MinAccumulator()
    passed = SumAccumulator()

    start = perf_counter()
    for i in range(count):
        original, response = sample_pair(i)
        call_start = perf_counter()
        ok = validator.is_valid(original, response)
        elapsed_ms = (perf_counter() - call_start) * 1000.0
        total.add(elapsed_ms)
        fastest.add(elapsed_ms)
        passed.add(1.0 if ok else 0.0)
    wall_ms = (perf_counter() - start) * 1000.0

    return Measurement(
        percentage=100,
        time=int(wall_ms),
        iteration=count,
        results={
            "Result": round(wall_ms, 3),
            "total_ms": round(total.get_result(), 3),
            "min_ms": round(fastest.get_result(), 3) if count else 0.0,
            "passed": int(passed.get_result()),
        },
    )


def benchmark_record_pass(
    directory: Path, count: int = DEFAULT_MESSAGE_COUNT, index: str = "index"
) -> Measurement:
    """Record ``count`` sample pairs into a fresh dictionary."""
    validator = DictionaryValidator(dictionary_directory=directory, dictionary_index=index, record=True)
    return _run_pass(validator, count)


def benchmark_validate_pass(
    directory: Path, count: int = DEFAULT_MESSAGE_COUNT, index: str = "index"
) -> Measurement:
    """Validate ``count`` sample pairs against a recorded dictionary."""
    validator = DictionaryValidator(dictionary_directory=directory, dictionary_index=index)
    return _run_pass(validator, count)


def run_benchmarks(
    directory: Path,
    destination: Destination,
    count: int = DEFAULT_MESSAGE_COUNT,
    index: str = "index",
) -> tuple[Measurement, Measurement]:
    """Record then validate into ``directory``, reporting both passes."""
    destination.open()
    try:
        recorded = benchmark_record_pass(directory, count, index)
        recorded.set("record", "pass")
        destination.report(recorded)
        validated = benchmark_validate_pass(directory, count, index)
        validated.set("validate", "pass")
        destination.report(validated)
    finally:
        destination.close()
    return recorded, validated
