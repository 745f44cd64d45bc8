"""Guardrails to keep the kernel free of upward imports and console output."""

import re
from pathlib import Path


FORBIDDEN_PATTERNS = {
    "argparse": re.compile(r"\bargparse\b"),
    "print(": re.compile(r"(?<![A-Za-z0-9_])print\s*\("),
    "replaydict.validator": re.compile(r"\breplaydict\.validator\b"),
    "replaydict.api": re.compile(r"\breplaydict\.api\b"),
    "replaydict.cli": re.compile(r"\breplaydict\.cli\b"),
    "sys.path": re.compile(r"\bsys\.path\b"),
}


def test_kernel_has_no_forbidden_tokens():
    kernel_dir = Path(__file__).resolve().parents[1] / "src" / "replaydict" / "kernel"
    offenders = []

    for path in kernel_dir.glob("*.py"):
        contents = path.read_text(encoding="utf-8")
        for token, pattern in FORBIDDEN_PATTERNS.items():
            if pattern.search(contents):
                offenders.append(f"{path.name}: {token}")

    assert not offenders, "Forbidden kernel tokens found: " + ", ".join(offenders)


def test_kernel_directory_exists():
    kernel_dir = Path(__file__).resolve().parents[1] / "src" / "replaydict" / "kernel"
    assert sorted(p.name for p in kernel_dir.glob("*.py")) == ["hash_utils.py", "index.py", "store.py"]
