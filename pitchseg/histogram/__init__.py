"""Histogram estimation of the background color."""

from .accumulator import HistogramAccumulator
from .histogrammer import Histogrammer
from .scene import AlwaysFold, HistogramDistanceContinuity, SceneContinuity

__all__ = ['HistogramAccumulator', 'Histogrammer', 'AlwaysFold',
           'HistogramDistanceContinuity', 'SceneContinuity']
