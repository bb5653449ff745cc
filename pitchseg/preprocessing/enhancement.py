"""Image smoothing applied to normalized frames before histogramming."""

import cv2
import numpy as np

# Kernel size value that turns smoothing off
SMOOTHING_DISABLED = -1


class ImageSmoother:
    """Gaussian smoothing to suppress pixel-level chrominance noise."""
    
    def __init__(self, kernel_size: int = SMOOTHING_DISABLED):
        """
        Initialize image smoother.
        
        Args:
            kernel_size: Odd square kernel side, or -1 to disable
        """
        self.kernel_size = kernel_size
    
    @property
    def enabled(self) -> bool:
        return self.kernel_size != SMOOTHING_DISABLED
    
    @property
    def sigma(self) -> float:
        return self.kernel_size / 3.0
    
    def smooth(self, frame: np.ndarray) -> np.ndarray:
        """Blur frame in place with sigma = kernel_size / 3."""
        if not self.enabled:
            return frame
        ksize = (self.kernel_size, self.kernel_size)
        frame[...] = cv2.GaussianBlur(frame, ksize, self.sigma, sigmaY=self.sigma)
        return frame


def smooth_image(frame: np.ndarray, kernel_size: int) -> np.ndarray:
    """Blur frame in place; no-op when kernel_size is -1."""
    return ImageSmoother(kernel_size).smooth(frame)
