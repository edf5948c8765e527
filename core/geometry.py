import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from core.math import Vec3, Ray
from core.material import Material


class Surface(ABC):
    """Anything a ray can hit. New surface kinds only need these two methods."""

    material: Material

    @abstractmethod
    def find_closest_intersection(self, ray: Ray) -> Optional["RayIntersection"]:
        pass

    @abstractmethod
    def normal_at(self, point: Vec3) -> Vec3:
        pass


@dataclass(frozen=True)
class RayIntersection:
    point: Vec3
    distance: float
    is_outer: bool
    surface: Surface

    @property
    def normal(self) -> Vec3:
        return self.surface.normal_at(self.point)

    @property
    def material(self) -> Material:
        return self.surface.material


class Sphere(Surface):
    def __init__(self, center: Vec3, radius: float, material: Material):
        self.center = center
        self.radius = float(radius)
        self.material = material

    def find_closest_intersection(self, ray: Ray) -> Optional[RayIntersection]:
        # |O + tD - C|^2 - R^2 = 0 with |D| = 1:
        # a = 1, b = 2 D.(O - C), c = |O - C|^2 - R^2
        oc = ray.origin - self.center
        b = 2 * ray.direction.dot(oc)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = b * b - 4 * c
        if discriminant < 0:
            return None

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b + sqrt_d) / 2
        t2 = (-b - sqrt_d) / 2
        if t1 < 0 and t2 < 0:
            return None  # sphere is behind the ray origin

        first = ray.point_at_parameter(t1)
        second = ray.point_at_parameter(t2)
        first_distance = (first - ray.origin).length()
        second_distance = (second - ray.origin).length()

        if first_distance < second_distance:
            point, distance = first, first_distance
        else:
            point, distance = second, second_distance
        is_outer = (point - self.center).length() - self.radius > 0
        return RayIntersection(point, distance, is_outer, self)

    def normal_at(self, point: Vec3) -> Vec3:
        return (point - self.center).normalize()

    def __repr__(self):
        return f"Sphere(center={self.center!r}, radius={self.radius})"
