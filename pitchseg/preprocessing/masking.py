"""Morphological cleanup of foreground masks."""

import cv2
import numpy as np


def cross_structuring_element() -> np.ndarray:
    """3x3 cross element (corners zeroed)."""
    kernel = np.ones((3, 3), np.uint8)
    kernel[0, 0] = 0
    kernel[0, 2] = 0
    kernel[2, 0] = 0
    kernel[2, 2] = 0
    return kernel


class MorphologicalCleaner:
    """Closes small gaps in a foreground mask."""
    
    def __init__(self):
        self.kernel = cross_structuring_element()
    
    def apply(self, mask: np.ndarray) -> np.ndarray:
        """Apply closing (dilate then erode) to mask in place."""
        mask[...] = cv2.morphologyEx(mask, cv2.MORPH_CLOSE, self.kernel)
        return mask


def apply_closing(mask: np.ndarray) -> np.ndarray:
    """Return a closed copy of mask using the cross element."""
    return cv2.morphologyEx(mask, cv2.MORPH_CLOSE, cross_structuring_element())
