"""Public message model consumed by the validator."""

from typing import Any, Dict

from pydantic import BaseModel, Field


class Message(BaseModel):
    """A unit of traffic: the payload plus optional headers and properties.

    The validator only ever reads the text form of the payload.
    """
    payload: Any = None
    headers: Dict[str, str] = Field(default_factory=dict)
    properties: Dict[str, str] = Field(default_factory=dict)

    def payload_text(self) -> str:
        return payload_text(self)


def payload_text(message: Any) -> str:
    """Render a message payload as text.

    Accepts a Message, any object with a ``payload`` attribute, or a bare
    payload. ``None`` renders as the empty string and bytes are decoded as
    UTF-8. Undecodable bytes and lone surrogates become U+FFFD, so the
    result always encodes cleanly.
    """
    if message is None:
        return ""
    payload = getattr(message, "payload", message)
    if payload is None:
        return ""
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload).decode("utf-8", errors="replace")
    text = str(payload)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        text = text.encode("utf-8", errors="surrogatepass").decode("utf-8", errors="replace")
    return text


def excerpt(text: str, limit: int = 64) -> str:
    """Shorten text for log and error messages."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
