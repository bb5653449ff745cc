"""
pitchseg Core Processor
Per-frame foreground/background segmentation against the dominant pitch color
"""

import logging
import numbers
import time
from typing import Any, Dict, Optional, Tuple

import numpy as np

from pitchseg.config import DEFAULT_CONFIG, FRAME_SIZE
from pitchseg.exceptions import ConfigurationError, DimensionMismatchError
from pitchseg.histogram.accumulator import HIST_CHANNEL, HistogramAccumulator
from pitchseg.histogram.histogrammer import Histogrammer
from pitchseg.histogram.scene import SceneContinuity, create_continuity
from pitchseg.preprocessing.enhancement import SMOOTHING_DISABLED, ImageSmoother
from pitchseg.preprocessing.masking import MorphologicalCleaner
from pitchseg.preprocessing.normalization import ColorNormalizer

logger = logging.getLogger(__name__)


class BackgroundRemover:
    """Segments players and ball from the pitch using normalized-color histograms"""
    
    def __init__(self, accum_size: int, bins: int, smooth_size: int,
                 apply_morphologic: bool = False,
                 frame_size: Optional[Tuple[int, int]] = None,
                 continuity: Optional[SceneContinuity] = None,
                 histogrammer: Optional[Histogrammer] = None,
                 diagnostic_log_size: int = 0):
        """
        Initialize background remover
        
        Args:
            accum_size: Number of frames averaged into the background histogram
            bins: Histogram resolution
            smooth_size: Odd blur kernel size (>= 3), or -1 to disable smoothing
            apply_morphologic: Close small gaps in the output mask
            frame_size: (width, height) of incoming frames; defaults to FRAME_SIZE
            continuity: Scene continuity strategy (defaults to AlwaysFold)
            histogrammer: Histogram operations (defaults to Histogrammer())
            diagnostic_log_size: Raw histograms kept for inspection; 0 disables
        """
        frame_size = tuple(frame_size) if frame_size is not None else FRAME_SIZE
        self._validate(accum_size, bins, smooth_size, frame_size, diagnostic_log_size)
        
        self.accum_size = int(accum_size)
        self.bins = int(bins)
        self.smooth_size = int(smooth_size)
        self.apply_morphologic = apply_morphologic
        self.frame_size = (int(frame_size[0]), int(frame_size[1]))
        diagnostic_log_size = int(diagnostic_log_size)
        
        self.normalizer = ColorNormalizer()
        self.smoother = ImageSmoother(self.smooth_size)
        self.histogrammer = histogrammer or Histogrammer()
        self.accumulator = HistogramAccumulator(
            self.accum_size, self.bins,
            continuity=continuity,
            diagnostic_log_size=diagnostic_log_size
        )
        self.cleaner = MorphologicalCleaner() if apply_morphologic else None
        
        # Buffers reused for every frame
        width, height = self.frame_size
        self.normalized_frame = np.zeros((height, width, 3), dtype=np.uint8)
        self.result_mask = np.zeros((height, width), dtype=np.uint8)
        
        self.stats = {
            'total_frames': 0,
            'folded_frames': 0,
            'scene_cuts': 0,
            'total_processing_time': 0.0
        }
    
    @classmethod
    def from_config(cls, config: Dict[str, Any] = None, **kwargs) -> 'BackgroundRemover':
        """
        Build a background remover from a configuration dictionary
        
        Args:
            config: Configuration in DEFAULT_CONFIG layout (missing sections use defaults)
            **kwargs: Extra constructor arguments (e.g. continuity)
        """
        config = config or {}
        seg = {**DEFAULT_CONFIG['segmentation'], **config.get('segmentation', {})}
        hist = {**DEFAULT_CONFIG['histogram'], **config.get('histogram', {})}
        scene = {**DEFAULT_CONFIG['scene'], **config.get('scene', {})}
        frame = {**DEFAULT_CONFIG['frame'], **config.get('frame', {})}
        
        kwargs.setdefault('frame_size', (frame['width'], frame['height']))
        kwargs.setdefault('histogrammer', Histogrammer(hist['filter_sigma'], hist['mask_min_ratio']))
        if 'continuity' not in kwargs:
            try:
                kwargs['continuity'] = create_continuity(scene['strategy'], scene['threshold'])
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
        
        return cls(
            accum_size=seg['accum_size'],
            bins=seg['bins'],
            smooth_size=seg['smooth_size'],
            apply_morphologic=seg['apply_morphologic'],
            diagnostic_log_size=seg['diagnostic_log_size'],
            **kwargs
        )
    
    @staticmethod
    def _is_int(value) -> bool:
        return isinstance(value, numbers.Integral) and not isinstance(value, bool)
    
    @classmethod
    def _validate(cls, accum_size, bins, smooth_size, frame_size, diagnostic_log_size):
        """Check constructor arguments once."""
        if not cls._is_int(accum_size) or accum_size <= 0:
            raise ConfigurationError(f"accum_size must be a positive integer, got {accum_size}")
        if not cls._is_int(bins) or bins <= 0:
            raise ConfigurationError(f"bins must be a positive integer, got {bins}")
        if smooth_size != SMOOTHING_DISABLED:
            if not cls._is_int(smooth_size) or smooth_size < 3 or smooth_size % 2 == 0:
                raise ConfigurationError(
                    f"smooth_size must be an odd integer >= 3 or -1, got {smooth_size}"
                )
        if len(frame_size) != 2 or any(not cls._is_int(v) or v <= 0 for v in frame_size):
            raise ConfigurationError(f"frame_size must be (width, height) > 0, got {frame_size}")
        if not cls._is_int(diagnostic_log_size) or diagnostic_log_size < 0:
            raise ConfigurationError(
                f"diagnostic_log_size must be a non-negative integer, got {diagnostic_log_size}"
            )
    
    @property
    def frame_shape(self) -> Tuple[int, int, int]:
        return self.normalized_frame.shape
    
    def process_frame(self, frame: np.ndarray) -> np.ndarray:
        """
        Segment a single frame
        
        The returned array is the remover's own mask buffer and is
        overwritten by the next call; copy it to keep it.
        
        Args:
            frame: BGR uint8 frame of the configured size
            
        Returns:
            Foreground mask (255=foreground, 0=pitch)
        """
        if frame.shape != self.frame_shape:
            raise DimensionMismatchError(self.frame_shape, frame.shape)
        if frame.dtype != np.uint8:
            raise TypeError(f"Frame must be uint8, got {frame.dtype}")
        
        start_time = time.time()
        
        self.normalizer.normalize(frame, out=self.normalized_frame)
        self.smoother.smooth(self.normalized_frame)
        
        hist = self.accumulator.compute_and_fold(self.normalized_frame)
        if self.accumulator.last_folded:
            self.stats['folded_frames'] += 1
        else:
            self.stats['scene_cuts'] += 1
        
        self.hist_method(self.normalized_frame, hist)
        
        if self.cleaner is not None:
            self.cleaner.apply(self.result_mask)
        
        processing_time = (time.time() - start_time) * 1000
        self.stats['total_frames'] += 1
        self.stats['total_processing_time'] += processing_time
        logger.debug(f"Frame {self.stats['total_frames']} segmented in {processing_time:.2f} ms "
                     f"(history {len(self.accumulator)}/{self.accum_size})")
        
        return self.result_mask
    
    def hist_method(self, frame: np.ndarray, hist: np.ndarray) -> np.ndarray:
        """Mask out pixels whose channel value falls in the dominant histogram peak."""
        smoothed = self.histogrammer.filter_hist(hist)
        hist_mask = self.histogrammer.get_hist_mask(smoothed)
        masked = np.multiply(hist, hist_mask)
        mask = self.histogrammer.back_proj(frame, masked, HIST_CHANNEL, invert=True)
        np.copyto(self.result_mask, mask)
        return self.result_mask
    
    def reset(self):
        """Clear temporal state and statistics."""
        self.accumulator.reset()
        for key in self.stats:
            self.stats[key] = 0 if key != 'total_processing_time' else 0.0
