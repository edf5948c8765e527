from core.math import Vec3


class Material:
    def __init__(self,
                 diffuse: Vec3 = Vec3(1, 1, 1),
                 specular: Vec3 = Vec3(0, 0, 0),
                 shininess: float = 1.0):
        """
        diffuse: Vec3, per-channel diffuse coefficients (kd)
        specular: Vec3, per-channel specular coefficients (ks)
        shininess: specular exponent (n)
        """
        self.diffuse = diffuse
        self.specular = specular
        self.shininess = float(shininess)

    def __repr__(self):
        return f"Material(diffuse={self.diffuse!r}, specular={self.specular!r}, shininess={self.shininess})"
