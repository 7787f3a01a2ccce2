# FILE: pathtracer/core/renderer.py
"""
Progressive renderer tying scene, integrator, sampler and accumulator together
"""
import logging
from typing import Optional

import numpy as np

from ..config import RenderConfig
from .accumulator import ProgressiveAccumulator
from .integrator import PathIntegrator
from .sampler import PixelSampler
from .scene import Scene, default_scene
from .vector import Color

logger = logging.getLogger(__name__)


class Renderer:
    """Owns the scene and the accumulation state for one run"""

    def __init__(self, config: Optional[RenderConfig] = None, scene: Optional[Scene] = None):
        self.config = config or RenderConfig.from_settings()
        self.scene = None
        self.integrator = None
        self.sampler = None
        self.accumulator = None
        self.set_scene(scene if scene is not None else default_scene())

        logger.info(f"Renderer initialized: {self.config.width}x{self.config.height}, "
                    f"{len(self.scene)} spheres, max depth {self.config.max_depth}")

    def set_scene(self, scene: Scene):
        """Set the scene and start accumulating from scratch"""
        cfg = self.config
        if self.sampler is not None:
            self.sampler.close()
        self.scene = scene
        self.integrator = PathIntegrator(
            scene,
            max_depth=cfg.max_depth,
            epsilon=cfg.epsilon,
            sky_color=Color(*cfg.sky_color),
            max_distance=cfg.max_distance,
        )
        self.sampler = PixelSampler(
            self.integrator,
            cfg.width,
            cfg.height,
            samples_per_pixel=cfg.samples_per_pixel,
            position_jitter=cfg.position_jitter,
            direction_jitter=cfg.direction_jitter,
            workers=cfg.workers,
        )
        self.reset_accumulator()

    def reset_accumulator(self):
        self.accumulator = ProgressiveAccumulator(self.sampler, seed=self.config.seed)

    @property
    def frame_count(self) -> int:
        return self.accumulator.frame_count

    def render_frame(self) -> np.ndarray:
        """Render one more frame and return the updated mean"""
        return self.accumulator.tick()

    def get_progressive_result(self) -> np.ndarray:
        """Current mean buffer; black before the first frame"""
        if self.accumulator.frame_count == 0:
            return np.zeros((self.config.height, self.config.width, 3), dtype=np.uint8)
        return self.accumulator.mean()

    def close(self):
        """Release the sampler's worker processes"""
        self.sampler.close()
