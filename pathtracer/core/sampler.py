# FILE: pathtracer/core/sampler.py
"""
Pixel sampler: jittered camera rays per pixel, averaged into an 8-bit frame
"""
import logging
import time
from concurrent.futures import ProcessPoolExecutor
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .integrator import PathIntegrator
from .scene import Ray
from .vector import BLACK, Color, Vector3, WHITE

logger = logging.getLogger(__name__)

SeedLike = Union[None, int, np.random.SeedSequence]


def _render_band(sampler: "PixelSampler", rows: range,
                 seed_seq: np.random.SeedSequence) -> Tuple[int, np.ndarray]:
    """Worker entry point: render one band of rows with its own generator"""
    rng = np.random.default_rng(seed_seq)
    return rows.start, sampler.render_rows(rows, rng)


class PixelSampler:
    """Fixed pinhole camera at the origin looking down +z"""

    def __init__(self, integrator: PathIntegrator, width: int, height: int,
                 samples_per_pixel: int = 100, position_jitter: float = 0.05,
                 direction_jitter: float = 0.001, workers: int = 1):
        if width <= 0 or height <= 0:
            raise ValueError(f"Image size must be positive, got {width}x{height}")
        if samples_per_pixel < 1:
            raise ValueError("samples_per_pixel must be at least 1")
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")

        self.integrator = integrator
        self.width = width
        self.height = height
        self.aspect_ratio = width / height
        self.samples_per_pixel = samples_per_pixel
        self.position_jitter = position_jitter
        self.direction_jitter = direction_jitter
        self.workers = workers
        self._pool: Optional[ProcessPoolExecutor] = None

        logger.info(f"PixelSampler initialized: {width}x{height}, "
                    f"{samples_per_pixel} spp, workers: {self.workers}")

    def __getstate__(self):
        # The pool stays in the parent process
        state = self.__dict__.copy()
        state['_pool'] = None
        return state

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _get_pool(self, workers: int) -> ProcessPoolExecutor:
        """Worker processes are started on first use and reused for every frame"""
        if self._pool is None:
            logger.debug(f"Starting {workers} worker processes")
            self._pool = ProcessPoolExecutor(max_workers=workers)
        return self._pool

    def close(self):
        """Shut down the worker processes, if any were started"""
        if self._pool is not None:
            self._pool.shutdown()
            self._pool = None

    def camera_coordinates(self, x: int, y: int) -> Tuple[float, float]:
        """Camera-plane coordinates of the pixel's top-left corner"""
        px = (2.0 * x / self.width - 1.0) * self.aspect_ratio
        py = 1.0 - 2.0 * y / self.height
        return px, py

    def camera_ray(self, x: int, y: int, rng: np.random.Generator) -> Ray:
        px, py = self.camera_coordinates(x, y)
        pj = self.position_jitter
        dj = self.direction_jitter

        ox, oy = rng.uniform(-pj, pj, 2)
        dx, dy = rng.uniform(-dj, dj, 2)

        origin = Vector3(float(ox), float(oy), 0.0)
        direction = Vector3(px + float(dx), py + float(dy), 1.0)
        return Ray.create(origin, direction, WHITE, 0)

    def sample_pixel(self, x: int, y: int, rng: np.random.Generator) -> Color:
        """Average of samples_per_pixel traced camera rays (unclamped)"""
        total = BLACK
        for _ in range(self.samples_per_pixel):
            total = total + self.integrator.trace(self.camera_ray(x, y, rng), rng)
        return total * (1.0 / self.samples_per_pixel)

    @staticmethod
    def encode(color: Color) -> Tuple[int, int, int]:
        return color.to_rgb8()

    def render_rows(self, rows: Sequence[int], rng: np.random.Generator) -> np.ndarray:
        """Render the given image rows into a (len(rows), width, 3) uint8 array"""
        band = np.zeros((len(rows), self.width, 3), dtype=np.uint8)
        for j, y in enumerate(rows):
            for x in range(self.width):
                band[j, x] = self.encode(self.sample_pixel(x, y, rng))
        return band

    def row_bands(self) -> List[range]:
        """Split the image rows into at most `workers` contiguous, disjoint bands"""
        count = min(self.workers, self.height)
        bounds = np.linspace(0, self.height, count + 1).astype(int)
        return [range(int(bounds[i]), int(bounds[i + 1])) for i in range(count)]

    def render_frame(self, seed: SeedLike = None) -> np.ndarray:
        """
        Render one complete, independent frame.

        Args:
            seed: int, SeedSequence or None. Each row band gets a generator
                spawned from it, so a fixed seed and worker count reproduce
                the same frame.

        Returns:
            np.ndarray: Read-only (height, width, 3) uint8 buffer
        """
        seed_seq = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
        bands = self.row_bands()
        band_seeds = seed_seq.spawn(len(bands))

        start_time = time.time()
        frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)

        if len(bands) == 1:
            rng = np.random.default_rng(band_seeds[0])
            frame[:] = self.render_rows(bands[0], rng)
        else:
            logger.debug(f"Rendering {len(bands)} row bands in worker processes")
            pool = self._get_pool(len(bands))
            futures = [pool.submit(_render_band, self, rows, band_seed)
                       for rows, band_seed in zip(bands, band_seeds)]
            for future in futures:
                row_start, band = future.result()
                frame[row_start:row_start + band.shape[0]] = band

        logger.debug(f"Frame rendered in {time.time() - start_time:.3f}s")
        frame.flags.writeable = False
        return frame


def to_rgba(frame: np.ndarray, alpha: int = 255) -> np.ndarray:
    """Append an opaque alpha channel to an RGB frame"""
    height, width = frame.shape[:2]
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    rgba[..., :3] = frame
    rgba[..., 3] = alpha
    return rgba
