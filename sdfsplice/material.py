from .core import InvalidPropertyError
from .expr import as_expr


class Material:
    """Supplies the color of a shape."""

    DEFAULT = None

    def __init__(self, color):
        """
        Args:
            color: A vec3 expression, an (r, g, b) tuple with values from
                   0.0 to 1.0, or a GLSL source string.
        """
        self._color = as_expr(color, 'vec3')

    @property
    def color(self):
        return self._color

    def compile(self, transform, prop: str) -> str:
        if prop == "color":
            return self._color.to_glsl()
        raise InvalidPropertyError(Material, prop)

    def __repr__(self):
        return f"Material({self._color.to_glsl()})"


Material.DEFAULT = Material((1, 1, 1))


def as_material(value) -> Material:
    """Accepts None (the default material), a Material, or a color value."""
    if value is None:
        return Material.DEFAULT
    if isinstance(value, Material):
        return value
    return Material(value)
