# FILE: pathtracer/core/integrator.py
"""
Path integrator: follows one camera ray through diffuse and mirror bounces
"""
import numpy as np

from .scene import DEFAULT_MAX_DISTANCE, Ray, Scene
from .vector import BLACK, Color, Vector3

SKY_COLOR = Color(10.0 / 255.0, 10.0 / 255.0, 20.0 / 255.0)


def random_unit_vector(rng: np.random.Generator) -> Vector3:
    """Uniform point in the [-1, 1] cube, normalized.

    Not a uniform sample of the sphere; the cube bias is part of the look.
    """
    while True:
        x, y, z = rng.uniform(-1.0, 1.0, 3)
        v = Vector3(float(x), float(y), float(z))
        if v.length_squared() > 0.0:
            return v.normalize()


def reflect(direction: Vector3, normal: Vector3) -> Vector3:
    return direction - normal * (2.0 * direction.dot(normal))


def diffuse_direction(normal: Vector3, rng: np.random.Generator) -> Vector3:
    """Random direction in the hemisphere around normal, biased towards it"""
    new_dir = random_unit_vector(rng) + normal
    if new_dir.dot(normal) < 0.0:
        new_dir = -new_dir
    return new_dir.normalize()


class PathIntegrator:
    """Estimates the radiance carried back along a ray"""

    def __init__(self, scene: Scene, max_depth: int = 10, epsilon: float = 0.001,
                 sky_color: Color = SKY_COLOR, max_distance: float = DEFAULT_MAX_DISTANCE):
        self.scene = scene
        self.max_depth = max_depth
        self.epsilon = epsilon
        self.sky_color = sky_color
        self.max_distance = max_distance

    def trace(self, ray: Ray, rng: np.random.Generator) -> Color:
        """
        Follow a ray until it escapes, reaches a light or runs out of bounces.

        Args:
            ray: Ray with its carried color and bounce count
            rng: Generator used for diffuse scattering

        Returns:
            Color: Radiance estimate, already attenuated by the carried color
        """
        origin, direction, carried, bounces = ray
        spheres = self.scene.spheres

        while True:
            hit = self.scene.closest_hit(Ray(origin, direction), self.max_distance)
            if hit is None:
                return self.sky_color * carried

            sphere = spheres[hit.sphere_index]
            if sphere.is_emissive:
                return sphere.albedo * carried

            if bounces >= self.max_depth:
                return BLACK

            point = origin + direction * hit.distance
            normal = (point - sphere.center).normalize()

            if sphere.is_mirror:
                new_dir = reflect(direction, normal).normalize()
            else:
                new_dir = diffuse_direction(normal, rng)

            origin = point + new_dir * self.epsilon
            direction = new_dir
            carried = carried * sphere.albedo
            bounces += 1
