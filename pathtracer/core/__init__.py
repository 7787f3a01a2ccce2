from .vector import Vector3, Color, BLACK, WHITE
from .scene import Ray, Sphere, Scene, Hit, intersect_sphere, default_scene
from .integrator import PathIntegrator, SKY_COLOR, random_unit_vector, reflect
from .sampler import PixelSampler, to_rgba
from .accumulator import ProgressiveAccumulator, AccumulatorState
from .renderer import Renderer
