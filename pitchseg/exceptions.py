"""Exceptions raised by pitchseg."""

from typing import Tuple


class ConfigurationError(ValueError):
    """Invalid segmenter configuration."""


class DimensionMismatchError(ValueError):
    """Frame shape does not match the segmenter's pre-allocated buffers."""
    
    def __init__(self, expected: Tuple[int, ...], actual: Tuple[int, ...]):
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        super().__init__(
            f"Frame shape {self.actual} does not match configured shape {self.expected}"
        )
