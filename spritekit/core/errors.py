"""Exceptions raised by the sprite processing pipeline."""


class SpriteKitError(Exception):
    """Base exception for sprite processing errors."""
    pass


class DecodeError(SpriteKitError):
    """Raised when source bytes cannot be decoded into a pixel buffer."""
    pass


class DimensionError(SpriteKitError):
    """Raised when a buffer does not have the dimensions it must have."""

    def __init__(self, message: str, expected: tuple[int, int], actual: tuple[int, int]):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class EncodeError(SpriteKitError):
    """Raised when a pixel buffer cannot be serialized."""
    pass
