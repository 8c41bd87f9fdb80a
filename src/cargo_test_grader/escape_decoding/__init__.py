"""Escape decoding domain exports."""

from .escape_decoder import MalformedEscapeError, decode_escapes

__all__ = ["MalformedEscapeError", "decode_escapes"]
