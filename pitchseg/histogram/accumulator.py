"""
Temporal Histogram Accumulation
Keeps a bounded window of recent histograms and folds new ones into their average
"""

import logging
from collections import deque
from typing import Deque, List, Optional

import numpy as np

from pitchseg.histogram.histogrammer import Histogrammer
from pitchseg.histogram.scene import AlwaysFold, SceneContinuity

logger = logging.getLogger(__name__)

# Normalized channel the background estimate is computed on
HIST_CHANNEL = 1


class HistogramAccumulator:
    """Bounded FIFO of histograms with a running average."""
    
    def __init__(self, accum_size: int, bins: int,
                 continuity: Optional[SceneContinuity] = None,
                 diagnostic_log_size: int = 0):
        """
        Initialize accumulator.
        
        Args:
            accum_size: Maximum number of histograms kept
            bins: Histogram resolution
            continuity: Strategy deciding whether a histogram is folded
                (defaults to AlwaysFold)
            diagnostic_log_size: Number of raw histograms kept for inspection;
                0 disables the log
        """
        self.accum_size = accum_size
        self.bins = bins
        self.continuity = continuity or AlwaysFold()
        
        self.history: Deque[np.ndarray] = deque()
        self.diagnostic_log: Optional[Deque[np.ndarray]] = (
            deque(maxlen=diagnostic_log_size) if diagnostic_log_size > 0 else None
        )
        self._sum = np.zeros(bins, dtype=np.float64)
        self.last_folded = False
    
    def __len__(self) -> int:
        return len(self.history)
    
    @property
    def average(self) -> Optional[np.ndarray]:
        """Elementwise mean of the histograms currently held."""
        if not self.history:
            return None
        return (self._sum / len(self.history)).astype(np.float32)
    
    def fold(self, hist: np.ndarray) -> np.ndarray:
        """
        Push a histogram, evicting the oldest beyond capacity.
        
        Args:
            hist: Histogram with ``bins`` entries
            
        Returns:
            Average of the histories after the push
        """
        entry = np.array(hist, dtype=np.float32).ravel()
        if entry.size != self.bins:
            raise ValueError(f"Expected histogram with {self.bins} bins, got {entry.size}")
        
        self.history.append(entry)
        self._sum += entry
        if len(self.history) > self.accum_size:
            evicted = self.history.popleft()
            self._sum -= evicted
        
        return self.average
    
    def compute_and_fold(self, frame: np.ndarray) -> np.ndarray:
        """
        Compute the frame histogram and return the one used for masking.
        
        Args:
            frame: Normalized (and possibly smoothed) 3-channel frame
            
        Returns:
            Temporal average when the frame continues the current scene,
            otherwise the frame's own histogram
        """
        hist = Histogrammer.calc_hist(frame, HIST_CHANNEL, self.bins)
        
        if self.diagnostic_log is not None:
            self.diagnostic_log.append(hist.copy())
        
        self.last_folded = self.continuity.is_same_scene(hist)
        if self.last_folded:
            return self.fold(hist)
        
        logger.warning("Scene cut: using single-frame histogram")
        return hist
    
    def seed(self, hists: List[np.ndarray]):
        """Replace the history with the given histograms (oldest first)."""
        self.reset()
        for hist in hists:
            self.fold(hist)
    
    def reset(self):
        """Drop all accumulated state."""
        self.history.clear()
        self._sum = np.zeros(self.bins, dtype=np.float64)
        self.last_folded = False
        if self.diagnostic_log is not None:
            self.diagnostic_log.clear()
        self.continuity.reset()
