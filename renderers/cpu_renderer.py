import logging
import time
from typing import List, Optional, Tuple

import numpy as np

from core.camera import Camera
from core.geometry import RayIntersection
from core.math import Vec3, Ray
from core.scene import Scene, RenderSettings, SceneInvariantError, LightSource
from renderers.base_renderer import (BaseRenderer, RenderError, RendererFactory,
                                     RGBObserver, check_dimensions)

logger = logging.getLogger(__name__)

Buffers = Tuple[np.ndarray, np.ndarray, np.ndarray]


class CPURenderer(BaseRenderer):
    """Sequential ray caster: one primary ray per pixel, Phong-style shading."""

    CAPABILITIES = ("ray_casting", "shadows", "phong_shading")

    def __init__(self, scene: Scene, settings: Optional[RenderSettings] = None,
                 name: str = "raycaster"):
        super().__init__(name)
        self.scene = scene
        self.settings = settings or RenderSettings()

    def get_capabilities(self) -> List[str]:
        return list(self.CAPABILITIES)

    def produce(self,
                eye: Vec3, view: Vec3, view_up: Vec3,
                horizontal: float, vertical: float,
                width: int, height: int,
                request_id,
                observer: RGBObserver) -> None:
        check_dimensions(width, height)
        start_time = time.time()
        logger.info("%s request %s: %dx%d, %d objects, %d lights", self.name, request_id,
                    width, height, len(self.scene.objects), len(self.scene.lights))

        camera = Camera(eye, view, view_up, horizontal, vertical, width, height)
        num_of_pixels = width * height
        buffers = (np.zeros(num_of_pixels, dtype=np.uint8),
                   np.zeros(num_of_pixels, dtype=np.uint8),
                   np.zeros(num_of_pixels, dtype=np.uint8))
        try:
            self._fill(camera, buffers)
        except Exception as e:
            logger.error("%s request %s failed: %r", self.name, request_id, e)
            raise RenderError(request_id, e) from e

        logger.info("%s request %s finished in %.2fs", self.name, request_id,
                    time.time() - start_time)
        red, green, blue = buffers
        observer(red, green, blue, request_id)

    def _fill(self, camera: Camera, buffers: Buffers):
        self._render_rows(camera, buffers, 0, camera.height)

    def _render_rows(self, camera: Camera, buffers: Buffers, y_start: int, y_end: int):
        """Render rows [y_start, y_end) into their slices of the channel buffers."""
        red, green, blue = buffers
        width = camera.width
        for y in range(y_start, y_end):
            row = [self._trace(camera.get_ray(x, y)) for x in range(width)]
            offset = y * width
            red[offset:offset + width] = [rgb[0] for rgb in row]
            green[offset:offset + width] = [rgb[1] for rgb in row]
            blue[offset:offset + width] = [rgb[2] for rgb in row]

    def _trace(self, ray: Ray) -> Tuple[int, int, int]:
        rec = self.scene.find_closest_intersection(ray)
        if rec is None:
            # background: black
            return 0, 0, 0

        col = self._determine_color(ray, rec)
        r = int(max(0, min(255, col.x)))
        g = int(max(0, min(255, col.y)))
        b = int(max(0, min(255, col.z)))
        return r, g, b

    def _determine_color(self, ray: Ray, rec: RayIntersection) -> Vec3:
        ambient = self.settings.ambient
        color = Vec3(ambient, ambient, ambient)

        for light in self.scene.lights:
            shadow_ray = Ray.from_points(light.position, rec.point)
            obstacle = self.scene.find_closest_intersection(shadow_ray)
            if obstacle is None:
                raise SceneInvariantError(
                    f"Shadow ray from {light.position!r} to {rec.point!r} hit nothing; "
                    f"it must at least hit the lit object.")

            if not self._light_visible(light, rec, obstacle):
                continue

            normal = rec.normal
            to_light = (light.position - rec.point).normalize()
            color += self._diffuse(light, rec, normal, to_light)
            color += self._specular(light, rec, normal, to_light, ray)

        return color

    def _light_visible(self, light: LightSource, rec: RayIntersection,
                       obstacle: RayIntersection) -> bool:
        object_distance = (light.position - rec.point).length()
        obstacle_distance = (light.position - obstacle.point).length()
        return object_distance < obstacle_distance + self.settings.shadow_epsilon

    @staticmethod
    def _diffuse(light: LightSource, rec: RayIntersection,
                 normal: Vec3, to_light: Vec3) -> Vec3:
        # Lambert
        cosine = max(to_light.dot(normal), 0.0)
        return light.intensity * rec.material.diffuse * cosine

    @staticmethod
    def _specular(light: LightSource, rec: RayIntersection,
                  normal: Vec3, to_light: Vec3, ray: Ray) -> Vec3:
        # Phong: r = 2(l.n)n - l
        reflected = (-to_light).reflect(normal).normalize()
        view_dir = (ray.origin - rec.point).normalize()
        cosine = reflected.dot(view_dir)
        if cosine <= 0:
            return Vec3(0, 0, 0)
        return light.intensity * rec.material.specular * (cosine ** rec.material.shininess)


RendererFactory.register("raycaster", CPURenderer)
