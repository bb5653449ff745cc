"""Frame preprocessing and mask cleanup."""

from .enhancement import ImageSmoother
from .masking import MorphologicalCleaner
from .normalization import ColorNormalizer

__all__ = ['ColorNormalizer', 'ImageSmoother', 'MorphologicalCleaner']
