from abc import abstractmethod
from .core import SceneNode
from .expr import ORIGIN, as_expr
from .material import as_material


class Shape(SceneNode):
    """A leaf of the scene graph with its own distance field and material."""

    def __init__(self, ids, material=None):
        super().__init__(ids)
        self.material = as_material(material)

    def compile(self, transform, output, prop: str):
        if prop == "sdf":
            expr = self.sdf(transform)
        elif prop == "normal":
            expr = self.normal(transform)
        else:
            expr = self.material.compile(transform, prop)
        self.write_property(output, prop, expr)

    def center(self, transform) -> str:
        """The shape's origin mapped into world space."""
        return transform(ORIGIN.to_glsl())

    @abstractmethod
    def sdf(self, transform) -> str:
        raise NotImplementedError

    @abstractmethod
    def normal(self, transform) -> str:
        raise NotImplementedError


class Sphere(Shape):
    def __init__(self, ids, radius, material=None):
        super().__init__(ids, material)
        self.radius = as_expr(radius, 'float')

    def sdf(self, transform) -> str:
        return f"length(point - {self.center(transform)}) - {self.radius.to_glsl()}"

    def normal(self, transform) -> str:
        return f"normalize(point - {self.center(transform)})"


class Plane(Shape):
    """A two-sided plane through the origin."""
    def __init__(self, ids, normal, material=None):
        super().__init__(ids, material)
        self.plane_normal = as_expr(normal, 'vec3')

    def sdf(self, transform) -> str:
        return f"abs(dot({self.plane_normal.to_glsl()}, point - {self.center(transform)}))"

    def normal(self, transform) -> str:
        return self.plane_normal.to_glsl()


class Ground(Shape):
    """A one-sided half-space; everything below the plane is inside."""
    def __init__(self, ids, material=None, normal=(0, 1, 0)):
        super().__init__(ids, material)
        self.plane_normal = as_expr(normal, 'vec3')

    def sdf(self, transform) -> str:
        return f"dot({self.plane_normal.to_glsl()}, point - {self.center(transform)})"

    def normal(self, transform) -> str:
        return self.plane_normal.to_glsl()


class Backdrop(Shape):
    """
    A color-only leaf with no geometry.

    Every property is answered by the material, so only `color` can be
    evaluated. Useful as the root of a template that only paints a
    background.
    """
    def __init__(self, ids, material):
        super().__init__(ids, material)

    def sdf(self, transform) -> str:
        return self.material.compile(transform, "sdf")

    def normal(self, transform) -> str:
        return self.material.compile(transform, "normal")
