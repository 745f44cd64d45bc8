"""Response file I/O.

Each recorded response lives in its own file named by its response
identifier, holding the payload text verbatim with no framing. Files are
read with undecodable bytes replaced, so a corrupted file compares as a
mismatch instead of failing the read.
"""

from pathlib import Path

from replaydict.exceptions import DictionaryIOError
from replaydict.kernel.hash_utils import is_response_identifier


def response_path(directory: Path, response_id: str) -> Path:
    """Path of a response file; rejects identifiers that are not a sha256 hex digest."""
    if not is_response_identifier(response_id):
        raise DictionaryIOError(
            f"Invalid response identifier {response_id[:80]!r} in '{directory}'", directory
        )
    return directory / response_id


def write_response(directory: Path, response_id: str, text: str) -> Path:
    """Write a response payload to its file, replacing any previous content."""
    path = response_path(directory, response_id)
    try:
        with open(path, "w", encoding="utf-8", errors="surrogatepass", newline="") as f:
            f.write(text)
    except (OSError, UnicodeError) as e:
        raise DictionaryIOError(
            f"Cannot record correct response to file '{path.resolve()}': {e}", path
        ) from e
    return path


def read_response(directory: Path, response_id: str) -> str:
    """Read a recorded response payload."""
    path = response_path(directory, response_id)
    try:
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            return f.read()
    except (OSError, UnicodeError) as e:
        raise DictionaryIOError(
            f"Cannot read correct response from file '{path.resolve()}': {e}", path
        ) from e
