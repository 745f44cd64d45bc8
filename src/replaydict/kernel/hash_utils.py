"""Content hashing for response identifiers.

A response identifier names the file holding a recorded response, so it
must be stable across processes and platforms and safe as a file name:

- SHA256 over the UTF-8 encoding of the response text (lone surrogates
  pass through encoded, so hashing never fails)
- lowercase hex, no prefix (a ``sha256:`` prefix would put a colon in the
  file name)

Two different responses that hash to the same digest share one file. That
is an accepted limitation; no collision resolution is attempted.
"""

import hashlib
import re
from typing import Union


RESPONSE_ID_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def response_identifier(content: Union[str, bytes]) -> str:
    """Compute the response identifier for a response payload.

    Args:
        content: Response payload text (or its UTF-8 bytes)

    Returns:
        SHA256 hash as a 64 character hex string
    """
    if isinstance(content, str):
        content_bytes = content.encode("utf-8", errors="surrogatepass")
    else:
        content_bytes = content

    return hashlib.sha256(content_bytes).hexdigest()


def is_response_identifier(name: str) -> bool:
    """Check whether a file name looks like a response identifier."""
    return bool(RESPONSE_ID_PATTERN.match(name))
