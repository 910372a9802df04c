from __future__ import annotations


class DecodeError(ValueError):
    """The byte stream is not an image the decoder recognizes, or it is corrupt."""


class EncodeError(RuntimeError):
    """The encoder failed while writing. Partial output is left in place."""


class UnsupportedFormatError(ValueError):
    """Save was asked for a format selector outside the known set."""
