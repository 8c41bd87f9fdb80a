"""Decoder for backslash escapes found in JSON-rendered diagnostic text."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_SIMPLE_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_UNICODE_ESCAPE_LENGTH = 4


class MalformedEscapeError(ValueError):
    """Raised when an escape sequence is truncated or carries invalid hex digits."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


def decode_escapes(text: str, *, strict: bool = True) -> str:
    """Replace backslash escape sequences in *text* with the characters they denote.

    ``\\b``, ``\\f``, ``\\n``, ``\\r``, ``\\t`` and ``\\uXXXX`` are decoded; a backslash
    followed by any other character yields that character unchanged.

    Args:
      text: Escaped text, typically a JSON string value rendered without its quotes.
      strict: Raise on malformed sequences instead of keeping them literally.

    Returns:
      The decoded text.

    Raises:
      MalformedEscapeError: If *strict* and a ``\\u`` escape is short of four hex
        digits or the text ends with a lone backslash.
    """
    decoded: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char != "\\":
            decoded.append(char)
            index += 1
            continue

        if index + 1 >= length:
            _reject("Malformed escape: trailing backslash", index, strict=strict)
            decoded.append(char)
            index += 1
            continue

        code = text[index + 1]
        if code == "u":
            digits = text[index + 2 : index + 2 + _UNICODE_ESCAPE_LENGTH]
            if len(digits) < _UNICODE_ESCAPE_LENGTH or not set(digits) <= _HEX_DIGITS:
                _reject(
                    f"Malformed escape: expected 4 hex digits after \\u, got {digits!r}",
                    index,
                    strict=strict,
                )
                decoded.append("\\u")
                index += 2
                continue
            decoded.append(chr(int(digits, 16)))
            index += 2 + _UNICODE_ESCAPE_LENGTH
            continue

        decoded.append(_SIMPLE_ESCAPES.get(code, code))
        index += 2
    return "".join(decoded)


def _reject(message: str, position: int, *, strict: bool) -> None:
    if strict:
        raise MalformedEscapeError(message, position)
    logger.warning("%s at offset %d; keeping it literally", message, position)
