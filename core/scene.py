from typing import List, Optional
from dataclasses import dataclass, field
from core.math import Vec3, Ray
from core.geometry import Surface, RayIntersection


class SceneInvariantError(RuntimeError):
    """The scene answered a query in a way the rendering model rules out."""


@dataclass(frozen=True)
class CameraParams:
    eye: Vec3
    view: Vec3
    view_up: Vec3
    horizontal: float
    vertical: float


@dataclass(frozen=True)
class RenderSettings:
    width: int = 500
    height: int = 500
    split_threshold: int = 20
    ambient: int = 15
    shadow_epsilon: float = 1e-5


@dataclass(frozen=True)
class NewtonSettings:
    convergence_threshold: float = 1e-3
    max_iterations: int = 64
    worker_factor: int = 8


@dataclass(frozen=True)
class LightSource:
    position: Vec3
    intensity: Vec3 = field(default_factory=lambda: Vec3(100, 100, 100))


class Scene:
    def __init__(self):
        self.objects: List[Surface] = []
        self.lights: List[LightSource] = []

    def add_object(self, obj: Surface):
        self.objects.append(obj)

    def add_light(self, light: LightSource):
        self.lights.append(light)

    def find_closest_intersection(self, ray: Ray) -> Optional[RayIntersection]:
        if ray is None:
            raise TypeError("Ray cannot be None.")

        closest = None
        closest_so_far = float("inf")
        for obj in self.objects:
            rec = obj.find_closest_intersection(ray)
            if rec is not None and rec.distance < closest_so_far:
                closest_so_far = rec.distance
                closest = rec
        return closest
