# FILE: pathtracer/core/scene.py
"""
Scene model: spheres, rays and the closest-hit query
"""
import math
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Tuple

from .vector import Color, Vector3, WHITE

DEFAULT_MAX_DISTANCE = 1000.0


class Ray(NamedTuple):
    origin: Vector3
    direction: Vector3  # unit length
    color: Color = WHITE  # carried attenuation
    bounces: int = 0

    @classmethod
    def create(cls, origin: Vector3, direction: Vector3,
               color: Color = WHITE, bounces: int = 0) -> "Ray":
        """Build a ray, normalizing the direction"""
        return cls(origin, direction.normalize(), color, bounces)

    def at(self, t: float) -> Vector3:
        return self.origin + self.direction * t


@dataclass(frozen=True)
class Sphere:
    center: Vector3
    radius: float
    albedo: Color
    is_emissive: bool = False
    is_mirror: bool = False
    name: str = ""

    def __post_init__(self):
        if not self.radius > 0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")


class Hit(NamedTuple):
    distance: float
    sphere_index: int


def intersect_sphere(ray: Ray, sphere: Sphere) -> Optional[float]:
    """
    Solve the ray/sphere quadratic.

    Returns None when the discriminant is negative, otherwise the
    algebraically smaller root. The root can be negative (origin inside or
    sphere behind the ray); callers reject anything <= 0.
    """
    origin, direction, center = ray.origin, ray.direction, sphere.center
    ocx = origin.x - center.x
    ocy = origin.y - center.y
    ocz = origin.z - center.z

    a = direction.x * direction.x + direction.y * direction.y + direction.z * direction.z
    b = 2.0 * (ocx * direction.x + ocy * direction.y + ocz * direction.z)
    c = ocx * ocx + ocy * ocy + ocz * ocz - sphere.radius * sphere.radius

    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return None

    sqrt_d = math.sqrt(discriminant)
    return min((-b + sqrt_d) / (2.0 * a), (-b - sqrt_d) / (2.0 * a))


class Scene:
    """Fixed, ordered collection of spheres"""

    def __init__(self, spheres: Iterable[Sphere] = ()):
        self._spheres: Tuple[Sphere, ...] = tuple(spheres)

    @property
    def spheres(self) -> Tuple[Sphere, ...]:
        return self._spheres

    def __len__(self):
        return len(self._spheres)

    def __getitem__(self, index: int) -> Sphere:
        return self._spheres[index]

    def __repr__(self):
        return f"Scene({len(self._spheres)} spheres)"

    def closest_hit(self, ray: Ray, max_distance: float = DEFAULT_MAX_DISTANCE) -> Optional[Hit]:
        """Nearest positive hit closer than max_distance; list order breaks ties"""
        closest_t = max_distance
        closest_index = -1

        for index, sphere in enumerate(self._spheres):
            t = intersect_sphere(ray, sphere)
            if t is not None and 0.0 < t < closest_t:
                closest_t = t
                closest_index = index

        if closest_index < 0:
            return None
        return Hit(closest_t, closest_index)


def default_scene() -> Scene:
    """The demo scene: two diffuse spheres on a huge ground sphere, a light and a mirror"""
    return Scene([
        Sphere(Vector3(-4.0, 0.0, 16.0), 3.0, Color(0.2, 0.2, 0.2), name="Dark Sphere"),
        Sphere(Vector3(3.5, 0.0, 12.0), 4.0, Color(0.35, 0.8, 0.3), name="Green Sphere"),
        Sphere(Vector3(0.0, -100.0, 10.0), 94.0, Color(0.6, 0.6, 0.6), name="Ground"),
        Sphere(Vector3(60.0, 65.0, 0.0), 45.0, Color(1.0, 1.0, 1.0),
               is_emissive=True, name="Light"),
        Sphere(Vector3(0.0, 20.0, 80.0), 10.0, Color(0.5, 0.2, 0.4), name="Distant Sphere"),
        Sphere(Vector3(-20.0, 10.0, 20.0), 5.0, Color(0.8, 0.8, 0.8),
               is_mirror=True, name="Mirror"),
    ])
