"""Tests for histogram module."""

import pytest
import numpy as np
from pitchseg.histogram.histogrammer import Histogrammer
from pitchseg.histogram.accumulator import HistogramAccumulator
from pitchseg.histogram.scene import (
    AlwaysFold, HistogramDistanceContinuity, SceneContinuity, create_continuity
)


def _uniform_frame(value, height=10, width=10):
    return np.full((height, width, 3), value, dtype=np.uint8)


def _hist_with_peak(bins, index, count=100.0):
    hist = np.zeros(bins, dtype=np.float32)
    hist[index] = count
    return hist


class NeverFold(SceneContinuity):
    """Continuity strategy reporting a cut on every frame."""
    
    def is_same_scene(self, hist):
        return False


class TestHistogrammer:
    """Test histogram operations."""
    
    def test_calc_hist_single_bin(self):
        """Test histogram of a uniform frame."""
        hist = Histogrammer.calc_hist(_uniform_frame(85), 1, 16)
        assert hist.shape == (16,)
        assert hist.dtype == np.float32
        assert hist[5] == 100
        assert hist.sum() == 100
    
    def test_filter_hist(self):
        """Test histogram smoothing keeps length and peak."""
        hist = np.array([0, 1, 3, 20, 4, 1, 0, 0], dtype=np.float32)
        smoothed = Histogrammer().filter_hist(hist)
        assert smoothed.shape == hist.shape
        assert np.all(smoothed >= 0)
        assert int(np.argmax(smoothed)) == 3
        assert smoothed[3] < hist[3]
    
    def test_hist_mask_selects_dominant_peak(self):
        """Test peak mask selection stops at valleys."""
        hist = np.array([0, 2, 6, 10, 6, 2, 0, 3, 0], dtype=np.float32)
        mask = Histogrammer(mask_min_ratio=0.05).get_hist_mask(hist)
        assert mask.tolist() == [0, 1, 1, 1, 1, 1, 0, 0, 0]
    
    def test_hist_mask_min_ratio(self):
        """Test that bins below the ratio floor are not selected."""
        hist = np.array([1, 2, 50, 100, 40, 30], dtype=np.float32)
        mask = Histogrammer(mask_min_ratio=0.35).get_hist_mask(hist)
        assert mask.tolist() == [0, 0, 1, 1, 1, 0]
    
    def test_hist_mask_empty_histogram(self):
        """Test mask of an all-zero histogram."""
        mask = Histogrammer().get_hist_mask(np.zeros(8, dtype=np.float32))
        assert mask.shape == (8,)
        assert np.all(mask == 0)
    
    def test_back_proj(self):
        """Test backprojection with and without inversion."""
        frame = np.zeros((10, 20, 3), dtype=np.uint8)
        frame[:, :10, 1] = 85    # bin 5
        frame[:, 10:, 1] = 170   # bin 10
        hist = _hist_with_peak(16, 5)
        
        mask = Histogrammer.back_proj(frame, hist, 1, invert=False)
        assert mask.shape == (10, 20)
        assert mask.dtype == np.uint8
        assert np.all(mask[:, :10] == 255)
        assert np.all(mask[:, 10:] == 0)
        
        inverted = Histogrammer.back_proj(frame, hist, 1, invert=True)
        assert np.all(inverted[:, :10] == 0)
        assert np.all(inverted[:, 10:] == 255)


class TestAccumulator:
    """Test temporal histogram accumulation."""
    
    def test_history_bound(self):
        """Test FIFO eviction beyond capacity."""
        acc = HistogramAccumulator(accum_size=3, bins=8)
        hists = [_hist_with_peak(8, i) for i in range(5)]
        for hist in hists:
            acc.fold(hist)
        
        assert len(acc) == 3
        assert np.array_equal(acc.history[0], hists[2])
        assert np.array_equal(acc.history[-1], hists[4])
    
    def test_average_of_identical_histograms(self):
        """Test that folding the same histogram keeps it unchanged."""
        acc = HistogramAccumulator(accum_size=4, bins=8)
        hist = np.array([0, 3, 7, 1, 0, 0, 2, 9], dtype=np.float32)
        for _ in range(4):
            average = acc.fold(hist)
        assert np.allclose(average, hist)
    
    def test_average_after_eviction(self):
        """Test running average equals mean of held entries."""
        acc = HistogramAccumulator(accum_size=3, bins=6)
        rng = np.random.default_rng(1)
        hists = [rng.random(6).astype(np.float32) * 100 for _ in range(10)]
        for hist in hists:
            average = acc.fold(hist)
        assert np.allclose(average, np.mean(hists[-3:], axis=0), atol=1e-3)
    
    def test_fold_rejects_wrong_length(self):
        """Test bin count check."""
        acc = HistogramAccumulator(accum_size=2, bins=8)
        with pytest.raises(ValueError):
            acc.fold(np.zeros(4, dtype=np.float32))
    
    def test_compute_and_fold_returns_average(self):
        """Test that the folded average replaces the frame histogram."""
        acc = HistogramAccumulator(accum_size=2, bins=16)
        acc.compute_and_fold(_uniform_frame(85))
        result = acc.compute_and_fold(_uniform_frame(170))
        
        assert acc.last_folded
        assert len(acc) == 2
        assert result[5] == pytest.approx(50)
        assert result[10] == pytest.approx(50)
    
    def test_first_frame_gives_history_of_one(self):
        """Test the accumulator is never empty after a frame."""
        acc = HistogramAccumulator(accum_size=5, bins=16)
        assert acc.average is None
        acc.compute_and_fold(_uniform_frame(85))
        assert len(acc) == 1
        assert acc.average[5] == 100
    
    def test_scene_cut_uses_raw_histogram(self):
        """Test the unfolded path when continuity reports a cut."""
        acc = HistogramAccumulator(accum_size=3, bins=16, continuity=NeverFold())
        result = acc.compute_and_fold(_uniform_frame(85))
        
        assert not acc.last_folded
        assert len(acc) == 0
        assert result[5] == 100
    
    def test_diagnostic_log(self):
        """Test bounded diagnostic log of raw histograms."""
        acc = HistogramAccumulator(accum_size=1, bins=16, diagnostic_log_size=2)
        for value in (85, 100, 170):
            acc.compute_and_fold(_uniform_frame(value))
        
        assert len(acc.diagnostic_log) == 2
        assert acc.diagnostic_log[-1][10] == 100
        assert HistogramAccumulator(accum_size=1, bins=16).diagnostic_log is None
    
    def test_seed_and_reset(self):
        """Test seeding and resetting the history."""
        acc = HistogramAccumulator(accum_size=3, bins=8)
        acc.seed([_hist_with_peak(8, 1), _hist_with_peak(8, 2)])
        assert len(acc) == 2
        assert acc.average[1] == pytest.approx(50)
        
        acc.reset()
        assert len(acc) == 0
        assert acc.average is None


class TestSceneContinuity:
    """Test scene continuity strategies."""
    
    def test_always_fold(self):
        """Test default strategy."""
        assert AlwaysFold().is_same_scene(_hist_with_peak(8, 0))
    
    def test_histogram_distance(self):
        """Test cut detection on disjoint histograms."""
        continuity = HistogramDistanceContinuity(threshold=0.5)
        first = _hist_with_peak(16, 2)
        assert continuity.is_same_scene(first)
        assert continuity.is_same_scene(first.copy())
        assert not continuity.is_same_scene(_hist_with_peak(16, 10))
    
    def test_empty_histograms_are_continuous(self):
        """Test repeated all-zero histograms are not reported as cuts."""
        continuity = HistogramDistanceContinuity(threshold=0.5)
        empty = np.zeros(16, dtype=np.float32)
        assert continuity.is_same_scene(empty)
        assert continuity.is_same_scene(empty.copy())
        assert continuity.distance(empty) == 0.0
    
    def test_empty_next_to_non_empty_is_cut(self):
        """Test switching between empty and non-empty histograms."""
        continuity = HistogramDistanceContinuity(threshold=0.5)
        assert continuity.is_same_scene(np.zeros(16, dtype=np.float32))
        assert not continuity.is_same_scene(_hist_with_peak(16, 3))
        assert not continuity.is_same_scene(np.zeros(16, dtype=np.float32))
    
    def test_histogram_distance_reset(self):
        """Test that reset forgets the previous histogram."""
        continuity = HistogramDistanceContinuity(threshold=0.5)
        continuity.is_same_scene(_hist_with_peak(16, 2))
        continuity.reset()
        assert continuity.previous is None
        assert continuity.is_same_scene(_hist_with_peak(16, 10))
    
    def test_create_continuity(self):
        """Test strategy factory."""
        assert isinstance(create_continuity("always"), AlwaysFold)
        strategy = create_continuity("histogram_distance", 0.3)
        assert isinstance(strategy, HistogramDistanceContinuity)
        assert strategy.threshold == 0.3
        with pytest.raises(ValueError):
            create_continuity("unknown")
