"""Scene continuity strategies deciding whether a histogram is folded."""

import logging
from typing import Optional

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class SceneContinuity:
    """Decides whether a new histogram belongs to the current scene."""
    
    def is_same_scene(self, hist: np.ndarray) -> bool:
        raise NotImplementedError
    
    def reset(self):
        """Forget any state carried between frames."""


class AlwaysFold(SceneContinuity):
    """Treats every frame as the same scene."""
    
    def is_same_scene(self, hist: np.ndarray) -> bool:
        return True


class HistogramDistanceContinuity(SceneContinuity):
    """Detects scene cuts from the distance between consecutive histograms."""
    
    def __init__(self, threshold: float = 0.5,
                 method: int = cv2.HISTCMP_BHATTACHARYYA):
        """
        Initialize continuity check.
        
        Args:
            threshold: Distance above which a cut is reported
            method: cv2.compareHist method; must be a distance (larger = more different)
        """
        self.threshold = threshold
        self.method = method
        self.previous: Optional[np.ndarray] = None
    
    def distance(self, hist: np.ndarray) -> float:
        """
        Distance between hist and the previously seen histogram.
        
        Two empty histograms are identical (0.0); an empty histogram next to
        a non-empty one is always a cut.
        """
        if self.previous is None:
            return 0.0
        previous_empty = not np.any(self.previous)
        current_empty = not np.any(hist)
        if previous_empty and current_empty:
            return 0.0
        if previous_empty or current_empty:
            return float("inf")
        return float(cv2.compareHist(self.previous, hist, self.method))
    
    def is_same_scene(self, hist: np.ndarray) -> bool:
        hist = np.asarray(hist, dtype=np.float32)
        dist = self.distance(hist)
        self.previous = hist.copy()
        if dist > self.threshold:
            logger.debug(f"Scene cut detected (distance {dist:.3f} > {self.threshold})")
            return False
        return True
    
    def reset(self):
        self.previous = None


def create_continuity(strategy: str = "always", threshold: float = 0.5) -> SceneContinuity:
    """Build a continuity strategy from its configuration name."""
    if strategy == "always":
        return AlwaysFold()
    if strategy == "histogram_distance":
        return HistogramDistanceContinuity(threshold=threshold)
    raise ValueError(f"Unknown scene strategy: {strategy}")
