"""
pitchseg - foreground/background segmentation of players and ball against the pitch.
"""

from .core import BackgroundRemover
from .exceptions import ConfigurationError, DimensionMismatchError

__all__ = ['BackgroundRemover', 'ConfigurationError', 'DimensionMismatchError']
__version__ = '1.0.0'
