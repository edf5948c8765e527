from core.math import Vec3, Ray


class Camera:
    def __init__(self,
                 eye: Vec3,
                 view: Vec3,
                 view_up: Vec3,
                 horizontal: float,  # screen extent along the x axis (world units)
                 vertical: float,    # screen extent along the y axis (world units)
                 width: int,
                 height: int):
        self.origin = eye
        self.horizontal = float(horizontal)
        self.vertical = float(vertical)
        self.width = width
        self.height = height

        forward = (view - eye).normalize()
        up = view_up.normalize()
        # view-up projected onto the plane orthogonal to the viewing direction
        self.y_axis = (up - forward * forward.dot(up)).normalize()
        self.x_axis = forward.cross(self.y_axis).normalize()

        self.screen_corner = (view
                              - self.x_axis * (self.horizontal / 2.0)
                              + self.y_axis * (self.vertical / 2.0))

    def screen_point(self, x: int, y: int) -> Vec3:
        return (self.screen_corner
                + self.x_axis * (self.horizontal * x / (self.width - 1))
                - self.y_axis * (self.vertical * y / (self.height - 1)))

    def get_ray(self, x: int, y: int) -> Ray:
        return Ray.from_points(self.origin, self.screen_point(x, y))
