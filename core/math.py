import math
import numpy as np


def _require(other):
    if other is None:
        raise TypeError("Vector operand cannot be None.")
    return other


class Vec3:
    """Immutable 3-D vector / point. Equality tolerates DELTA per component."""

    DELTA = 1e-6

    __slots__ = ("_x", "_y", "_z")

    def __init__(self, x=0.0, y=0.0, z=0.0):
        self._x = float(x)
        self._y = float(y)
        self._z = float(z)

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> float:
        return self._z

    def __add__(self, other):
        _require(other)
        return Vec3(self._x + other.x,
                    self._y + other.y,
                    self._z + other.z)

    def __sub__(self, other):
        _require(other)
        return Vec3(self._x - other.x,
                    self._y - other.y,
                    self._z - other.z)

    def __mul__(self, t):
        # scalar or component-wise (Hadamard) product
        _require(t)
        if isinstance(t, Vec3):
            return Vec3(self._x * t.x,
                        self._y * t.y,
                        self._z * t.z)
        return Vec3(self._x * t, self._y * t, self._z * t)

    __rmul__ = __mul__

    def __truediv__(self, t):
        return Vec3(self._x / t, self._y / t, self._z / t)

    def __neg__(self):
        return Vec3(-self._x, -self._y, -self._z)

    def add(self, other):
        return self + other

    def sub(self, other):
        return self - other

    def scale(self, s: float):
        return Vec3(self._x * s, self._y * s, self._z * s)

    def dot(self, other):
        _require(other)
        return self._x * other.x + self._y * other.y + self._z * other.z

    def cross(self, other):
        _require(other)
        return Vec3(
            self._y * other.z - self._z * other.y,
            self._z * other.x - self._x * other.z,
            self._x * other.y - self._y * other.x
        )

    def length(self):
        return math.sqrt(self._x * self._x + self._y * self._y + self._z * self._z)

    norm = length

    def normalize(self):
        l = self.length()
        if l == 0:
            raise ValueError("Cannot normalize a zero-length vector.")
        return self / l

    normalized = normalize

    def cos_angle(self, other):
        _require(other)
        this_norm = self.length()
        other_norm = other.length()
        if this_norm == 0 or other_norm == 0:
            raise ValueError("Cannot calculate the angle with a zero-length vector.")
        return self.dot(other) / (this_norm * other_norm)

    def reflect(self, normal):
        # r = v - 2 * dot(v, n) * n
        return self - normal * (2 * self.dot(normal))

    def to_tuple(self):
        return self._x, self._y, self._z

    def to_np(self):
        return np.array([self._x, self._y, self._z], dtype=np.float64)

    def __eq__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return (abs(self._x - other.x) <= self.DELTA
                and abs(self._y - other.y) <= self.DELTA
                and abs(self._z - other.z) <= self.DELTA)

    __hash__ = None

    def __repr__(self):
        return f"Vec3({self._x:.3f}, {self._y:.3f}, {self._z:.3f})"


class Ray:
    def __init__(self, origin: Vec3, direction: Vec3):
        self.origin = _require(origin)
        self.direction = _require(direction).normalize()

    @classmethod
    def from_points(cls, start: Vec3, end: Vec3) -> "Ray":
        """Ray starting at start and passing through end."""
        return cls(start, end - start)

    def point_at_parameter(self, t):
        return self.origin + self.direction * t
