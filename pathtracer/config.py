"""
Configuration settings for the path tracer
"""
from dataclasses import dataclass, fields
from typing import Optional, Tuple

# Rendering settings
RENDER_SETTINGS = {
    'width': 360,
    'height': 240,
    'samples_per_pixel': 100,
    'max_depth': 10,
    'position_jitter': 0.05,   # camera origin jitter, per axis
    'direction_jitter': 0.001,  # camera direction jitter, per axis
    'epsilon': 0.001,  # bounce origin offset
    'max_distance': 1000.0,
    'workers': 1,
    'seed': None,
}

# Display settings
DISPLAY_SETTINGS = {
    'screen_width': 720,
    'screen_height': 480,
    'title': 'Raytracing',
    'max_frames': 1,  # 0 renders until the window is closed
    'update_interval': 0.01,  # seconds between GUI polls
}

# Scene settings
SCENE_SETTINGS = {
    'sky_color': (10.0 / 255.0, 10.0 / 255.0, 20.0 / 255.0),
}


class _SettingsMixin:
    @classmethod
    def from_settings(cls, **overrides):
        """Defaults from the settings dict, with keyword overrides"""
        names = {f.name for f in fields(cls)}
        unknown = set(overrides) - names
        if unknown:
            raise TypeError(f"Unknown settings: {', '.join(sorted(unknown))}")
        return cls(**overrides)


@dataclass
class RenderConfig(_SettingsMixin):
    width: int = RENDER_SETTINGS['width']
    height: int = RENDER_SETTINGS['height']
    samples_per_pixel: int = RENDER_SETTINGS['samples_per_pixel']
    max_depth: int = RENDER_SETTINGS['max_depth']
    position_jitter: float = RENDER_SETTINGS['position_jitter']
    direction_jitter: float = RENDER_SETTINGS['direction_jitter']
    epsilon: float = RENDER_SETTINGS['epsilon']
    max_distance: float = RENDER_SETTINGS['max_distance']
    workers: int = RENDER_SETTINGS['workers']
    seed: Optional[int] = RENDER_SETTINGS['seed']
    sky_color: Tuple[float, float, float] = SCENE_SETTINGS['sky_color']

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel < 1:
            raise ValueError("samples_per_pixel must be at least 1")
        if self.max_depth < 0:
            raise ValueError("max_depth cannot be negative")
        if self.position_jitter < 0 or self.direction_jitter < 0:
            raise ValueError("Jitter magnitudes cannot be negative")
        if self.epsilon <= 0:
            raise ValueError("epsilon must be positive")
        if self.max_distance <= 0:
            raise ValueError("max_distance must be positive")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")
        if len(self.sky_color) != 3:
            raise ValueError("sky_color needs exactly three channels")


@dataclass
class DisplayConfig(_SettingsMixin):
    screen_width: int = DISPLAY_SETTINGS['screen_width']
    screen_height: int = DISPLAY_SETTINGS['screen_height']
    title: str = DISPLAY_SETTINGS['title']
    max_frames: int = DISPLAY_SETTINGS['max_frames']
    update_interval: float = DISPLAY_SETTINGS['update_interval']

    def __post_init__(self):
        if self.screen_width <= 0 or self.screen_height <= 0:
            raise ValueError("Screen size must be positive")
        if self.max_frames < 0:
            raise ValueError("max_frames cannot be negative")
        if self.update_interval <= 0:
            raise ValueError("update_interval must be positive")

