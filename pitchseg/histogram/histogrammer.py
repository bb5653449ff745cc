"""
Histogram utilities: computation, smoothing, peak masking and backprojection.
"""

import cv2
import numpy as np
from scipy.ndimage import gaussian_filter1d

# Upper bound is exclusive
HIST_RANGE = [0.0, 255.0]


class Histogrammer:
    """Single-channel histogram operations used for background estimation."""
    
    def __init__(self, filter_sigma: float = 1.0, mask_min_ratio: float = 0.05):
        """
        Initialize histogrammer.
        
        Args:
            filter_sigma: Gaussian sigma (in bins) used by filter_hist
            mask_min_ratio: Fraction of the peak below which get_hist_mask
                stops growing the selected run of bins
        """
        self.filter_sigma = filter_sigma
        self.mask_min_ratio = mask_min_ratio
    
    @staticmethod
    def calc_hist(frame: np.ndarray, channel: int, bins: int) -> np.ndarray:
        """Histogram of one channel over [0, 255) as a flat float32 vector."""
        hist = cv2.calcHist([frame], [channel], None, [bins], HIST_RANGE)
        return hist.ravel()
    
    def filter_hist(self, hist: np.ndarray) -> np.ndarray:
        """Smooth a histogram across bins to remove spurious peaks."""
        smoothed = gaussian_filter1d(np.asarray(hist, dtype=np.float32),
                                     self.filter_sigma, mode='constant', cval=0.0)
        return np.clip(smoothed, 0.0, None)
    
    def get_hist_mask(self, hist: np.ndarray) -> np.ndarray:
        """
        Select the bins belonging to the dominant peak.
        
        Starting at the global maximum, the selection grows outward while
        the neighbouring bin does not rise and stays above
        ``mask_min_ratio * peak``.
        
        Args:
            hist: Histogram (usually the filtered one)
            
        Returns:
            float32 vector of the same length with 1 for selected bins
        """
        hist = np.asarray(hist, dtype=np.float32)
        mask = np.zeros_like(hist)
        if hist.size == 0:
            return mask
        
        peak = int(np.argmax(hist))
        peak_value = hist[peak]
        if peak_value <= 0:
            return mask
        
        floor = self.mask_min_ratio * peak_value
        
        left = peak
        while left > 0 and floor < hist[left - 1] <= hist[left]:
            left -= 1
        
        right = peak
        while right < hist.size - 1 and floor < hist[right + 1] <= hist[right]:
            right += 1
        
        mask[left:right + 1] = 1.0
        return mask
    
    @staticmethod
    def back_proj(frame: np.ndarray, hist: np.ndarray, channel: int,
                  invert: bool = False) -> np.ndarray:
        """
        Backproject a histogram onto a frame.
        
        Args:
            frame: Multi-channel uint8 frame
            hist: Histogram with bins over [0, 255)
            channel: Channel index looked up against the histogram
            invert: If True, pixels in non-empty bins become 0 instead of 255
            
        Returns:
            uint8 mask (255/0) with the frame's height and width
        """
        occupied = (np.asarray(hist, dtype=np.float32) > 0).astype(np.float32)
        occupied = occupied.reshape(-1, 1)
        mask = cv2.calcBackProject([frame], [channel], occupied, HIST_RANGE, scale=255)
        if invert:
            mask = cv2.bitwise_not(mask)
        return mask
