# FILE: pathtracer/core/vector.py
"""
Immutable vector and color value types used by the tracer
"""
import math
from typing import NamedTuple, Tuple


class Vector3(NamedTuple):
    """3D vector"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other):
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar):
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self):
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalize(self) -> "Vector3":
        """Return the unit vector pointing the same way.

        Raises:
            ValueError: if the vector has zero length
        """
        length = self.length()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vector3(self.x / length, self.y / length, self.z / length)


class Color(NamedTuple):
    """Linear RGB color, unclamped"""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __add__(self, other):
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return Color(self.r * other, self.g * other, self.b * other)
        return Color(self.r * other.r, self.g * other.g, self.b * other.b)

    def __rmul__(self, scalar):
        return Color(self.r * scalar, self.g * scalar, self.b * scalar)

    def clamped(self) -> "Color":
        """Clip every channel to [0, 1]"""
        return Color(
            min(1.0, max(0.0, self.r)),
            min(1.0, max(0.0, self.g)),
            min(1.0, max(0.0, self.b)),
        )

    def to_rgb8(self) -> Tuple[int, int, int]:
        """Encode as an 8-bit triple (clipped, rounded to nearest)"""
        c = self.clamped()
        return (int(round(c.r * 255)), int(round(c.g * 255)), int(round(c.b * 255)))


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
