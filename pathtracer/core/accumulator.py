# FILE: pathtracer/core/accumulator.py
"""
Progressive accumulation of independently sampled frames
"""
import logging
import threading
import time
from enum import Enum
from typing import Optional

import numpy as np

from .sampler import PixelSampler, SeedLike

logger = logging.getLogger(__name__)


class AccumulatorState(Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"


class ProgressiveAccumulator:
    """Running per-pixel mean over every frame rendered so far"""

    def __init__(self, sampler: PixelSampler, seed: SeedLike = None):
        self.sampler = sampler
        self._seed_seq = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
        self._sum: Optional[np.ndarray] = None
        self.frame_count = 0
        self.last_render_time = 0.0
        self._lock = threading.Lock()

    @property
    def state(self) -> AccumulatorState:
        return AccumulatorState.IDLE if self.frame_count == 0 else AccumulatorState.ACCUMULATING

    @property
    def shape(self):
        return (self.sampler.height, self.sampler.width, 3)

    def reset(self):
        """Drop every accumulated frame"""
        with self._lock:
            self._sum = None
            self.frame_count = 0

    def tick(self) -> np.ndarray:
        """Render one new frame, fold it into the mean and return the mean"""
        start_time = time.time()
        frame_seed = self._seed_seq.spawn(1)[0]
        frame = self.sampler.render_frame(frame_seed)
        self.last_render_time = time.time() - start_time

        mean = self.add_frame(frame)
        logger.info(f"Frame {self.frame_count} rendered in {self.last_render_time:.3f}s")
        return mean

    def add_frame(self, frame: np.ndarray) -> np.ndarray:
        """
        Add a finished frame to the running sum.

        Args:
            frame: (height, width, 3) uint8 buffer

        Returns:
            np.ndarray: Updated mean buffer
        """
        if frame.shape != self.shape:
            raise ValueError(f"Frame shape {frame.shape} does not match {self.shape}")
        if frame.dtype != np.uint8:
            raise ValueError(f"Frame dtype must be uint8, got {frame.dtype}")

        # Sum and count change together under the lock
        with self._lock:
            if self._sum is None:
                self._sum = np.zeros(self.shape, dtype=np.uint64)
            self._sum += frame
            self.frame_count += 1
            return self._mean()

    def mean(self) -> np.ndarray:
        """Per-pixel integer mean of all frames, read-only uint8"""
        with self._lock:
            return self._mean()

    def _mean(self) -> np.ndarray:
        if self._sum is None:
            raise RuntimeError("No frames accumulated yet")

        result = (self._sum // np.uint64(self.frame_count)).astype(np.uint8)
        result.flags.writeable = False
        return result
