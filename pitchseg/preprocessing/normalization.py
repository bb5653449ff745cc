"""
Chromaticity Normalization Module
Removes brightness variation so the pitch has a stable color signature
"""

import numpy as np
from typing import Optional


class ColorNormalizer:
    """Rescales each pixel's channels by their sum (chromaticity coordinates)."""
    
    def __init__(self, scale: int = 255):
        """
        Initialize normalizer.
        
        Args:
            scale: Value a fully saturated channel maps to
        """
        self.scale = scale
    
    def normalize(self, frame: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Normalize a 3-channel uint8 frame.
        
        Each output channel is floor(scale * c / s) where s is the pixel's
        channel sum, with s = 1 for black pixels. The whole frame is read
        before ``out`` is written, so ``out`` may be ``frame`` itself.
        
        Args:
            frame: Input 3-channel uint8 frame
            out: Optional pre-allocated output buffer of the same shape
            
        Returns:
            Normalized uint8 frame (``out`` when given)
        """
        pixels = frame.astype(np.int32)
        sums = pixels.sum(axis=2, keepdims=True)
        sums[sums == 0] = 1
        normalized = (self.scale * pixels) // sums
        
        if out is None:
            return normalized.astype(np.uint8)
        
        np.copyto(out, normalized, casting='unsafe')
        return out


def normalize_chromaticity(frame: np.ndarray) -> np.ndarray:
    """Convenience function for chromaticity normalization."""
    return ColorNormalizer().normalize(frame)
