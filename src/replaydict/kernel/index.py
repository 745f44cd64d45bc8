"""Index file codec and the in-memory index cache.

The index maps original-message fingerprints to response identifiers,
one ``<escaped-fingerprint>=<response-identifier>`` entry per line.

Escaping rules for the key:
- ``\\`` becomes ``\\\\``
- ``=`` becomes ``\\=`` and ``:`` becomes ``\\:`` (both are delimiters)
- line feed becomes ``\\n`` and carriage return ``\\r``

The mapping is injective, so any payload text round-trips through the
index, and one entry always occupies exactly one line.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from replaydict.exceptions import DictionaryIOError

logger = logging.getLogger(__name__)

_ESCAPES = {
    "\\": "\\\\",
    "=": "\\=",
    ":": "\\:",
    "\n": "\\n",
    "\r": "\\r",
}
_UNESCAPES = {
    "\\": "\\",
    "=": "=",
    ":": ":",
    "n": "\n",
    "r": "\r",
}


def escape_key(text: str) -> str:
    """Escape payload text so it can serve as an index key."""
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def unescape_key(key: str) -> str:
    """Invert escape_key().

    Unknown escape sequences keep the escaped character, and a trailing
    lone backslash is kept as is.
    """
    out: List[str] = []
    i = 0
    while i < len(key):
        ch = key[i]
        if ch == "\\" and i + 1 < len(key):
            nxt = key[i + 1]
            out.append(_UNESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def fingerprint(payload: str) -> str:
    """Fingerprint of an original message payload: its escaped text."""
    return escape_key(payload)


def format_entry(key: str, response_id: str) -> str:
    """Render one index line for an already escaped key."""
    return f"{key}={response_id}\n"


def split_entry(line: str) -> Optional[Tuple[str, str]]:
    """Split an index line at the first unescaped ``=``.

    Returns:
        (escaped key, response identifier), or None for a malformed line
    """
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "=":
            return line[:i], line[i + 1:].strip()
        i += 1
    return None


def iter_entries(text: str) -> Iterator[Tuple[int, str, Optional[Tuple[str, str]]]]:
    """Yield (line number, raw line, parsed entry or None) for non-empty lines."""
    for lineno, raw in enumerate(text.split("\n"), start=1):
        line = raw.rstrip("\r")
        if not line.strip():
            continue
        yield lineno, line, split_entry(line)


def parse_index(text: str, source: str = "<index>") -> Dict[str, str]:
    """Parse index file content into an escaped-key mapping.

    Malformed lines are logged and skipped. When a key repeats, the last
    line wins.
    """
    entries: Dict[str, str] = {}
    for lineno, line, entry in iter_entries(text):
        if entry is None:
            logger.warning("Skipping malformed index line %d in %s: %r", lineno, source, line[:64])
            continue
        key, response_id = entry
        entries[key] = response_id
    return entries


def read_index(path: Path) -> Dict[str, str]:
    """Read and parse an index file."""
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except (OSError, UnicodeError) as e:
        raise DictionaryIOError(f"Unable to load index file '{path.resolve()}': {e}", path) from e
    return parse_index(text, source=str(path))


def append_entry(path: Path, key: str, response_id: str) -> None:
    """Append one entry to the index file, creating it if needed."""
    try:
        with open(path, "a", encoding="utf-8", errors="surrogatepass", newline="") as f:
            f.write(format_entry(key, response_id))
    except (OSError, UnicodeError) as e:
        raise DictionaryIOError(f"Unable to append to index file '{path.resolve()}': {e}", path) from e


class DictionaryIndex:
    """Lazily loaded, cached copy of an on-disk index.

    The file is read at most once; entries appended later are not seen
    until reload() is called. A failed load is not cached.
    """

    def __init__(self, path: Path):
        self.path = path
        self._entries: Optional[Dict[str, str]] = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._entries is not None

    def _ensure_loaded(self) -> Dict[str, str]:
        entries = self._entries
        if entries is not None:
            return entries
        with self._lock:
            if self._entries is None:
                self._entries = read_index(self.path)
                logger.info("Loaded %d index entries from %s", len(self._entries), self.path)
            return self._entries

    def get(self, key: str) -> Optional[str]:
        """Look up the response identifier for an escaped key."""
        return self._ensure_loaded().get(key)

    def entries(self) -> Dict[str, str]:
        return dict(self._ensure_loaded())

    def reload(self) -> None:
        """Drop the cached entries and read the file again."""
        with self._lock:
            self._entries = None
        self._ensure_loaded()

    def __len__(self) -> int:
        return len(self._ensure_loaded())
