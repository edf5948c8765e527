from core.math import Vec3
from core.material import Material
from core.geometry import Sphere
from core.scene import Scene, LightSource, CameraParams


class PredefinedSceneBuilder:
    """Demo scene: a few glossy spheres lit by two point lights."""

    def __init__(self):
        # camera on the x axis looking at the origin, z is up
        self.eye = Vec3(10, 0, 0)
        self.view = Vec3(0, 0, 0)
        self.view_up = Vec3(0, 0, 10)
        self.horizontal = 20.0
        self.vertical = 20.0

    def build_scene(self) -> Scene:
        scene = Scene()
        materials = self._create_materials()
        self._create_spheres(scene, materials)
        self._create_lighting(scene)
        return scene

    def create_camera(self) -> CameraParams:
        return CameraParams(self.eye, self.view, self.view_up,
                            self.horizontal, self.vertical)

    def _create_materials(self) -> dict:
        return {
            'matte_white': Material(
                diffuse=Vec3(1, 1, 1), specular=Vec3(0.5, 0.5, 0.5), shininess=10
            ),
            'red': Material(
                diffuse=Vec3(1, 0.2, 0.2), specular=Vec3(0.8, 0.8, 0.8), shininess=50
            ),
            'green': Material(
                diffuse=Vec3(0.2, 1, 0.2), specular=Vec3(0.5, 0.5, 0.5), shininess=20
            ),
            'blue': Material(
                diffuse=Vec3(0.2, 0.2, 1), specular=Vec3(1, 1, 1), shininess=80
            ),
        }

    def _create_spheres(self, scene: Scene, materials: dict):
        scene.add_object(Sphere(Vec3(-2, 0, 0), 3, materials['matte_white']))
        scene.add_object(Sphere(Vec3(1, 4, 3), 1.5, materials['red']))
        scene.add_object(Sphere(Vec3(2, -4, -3), 1.5, materials['green']))
        scene.add_object(Sphere(Vec3(3, -3, 4), 1, materials['blue']))

    def _create_lighting(self, scene: Scene):
        scene.add_light(LightSource(Vec3(10, 5, 5), Vec3(100, 100, 100)))
        scene.add_light(LightSource(Vec3(10, -5, -5), Vec3(50, 50, 50)))
