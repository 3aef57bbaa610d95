import math
import numbers
import numpy as np


class Expr:
    """A value that renders itself as GLSL source text."""
    type = None

    def to_glsl(self) -> str:
        raise NotImplementedError

    def __str__(self):
        return self.to_glsl()

    def __repr__(self):
        return f"{type(self).__name__}({self.to_glsl()!r})"


class Float(Expr):
    """A numeric literal, always rendered as a GLSL float."""
    type = 'float'

    def __init__(self, value):
        if isinstance(value, (bool, np.bool_)):
            raise TypeError("Float literals cannot be booleans")
        if not math.isfinite(value):
            raise ValueError(f"Float literal must be finite, got {value}")
        if not isinstance(value, (numbers.Integral, float, np.floating)):
            # Fraction and friends don't print as decimals.
            value = float(value)
        self._value = value

    @property
    def value(self):
        return self._value

    def to_glsl(self) -> str:
        text = str(self._value)
        if '.' in text:
            return text
        mantissa, sep, exponent = text.lower().partition('e')
        if sep:
            return f"{mantissa}.0e{exponent}"
        return text + ".0"


class Vec3(Expr):
    """A 3-vector literal; each component is itself a float expression."""
    type = 'vec3'

    def __init__(self, x, y, z):
        self._components = tuple(as_expr(c, 'float') for c in (x, y, z))

    @property
    def components(self):
        return self._components

    def to_glsl(self) -> str:
        x, y, z = (c.to_glsl() for c in self._components)
        return f"vec3({x}, {y}, {z})"


class Raw(Expr):
    """
    An arbitrary fragment of GLSL source.

    The fragment is parenthesised when rendered so it composes safely into
    larger expressions. `type` may be given to declare what the fragment
    evaluates to; when omitted the fragment is accepted anywhere.
    """
    def __init__(self, source: str, type: str = None):
        self._source = source
        self.type = type

    @property
    def source(self):
        return self._source

    def to_glsl(self) -> str:
        return f"({self._source})"


def as_expr(value, type: str = None) -> Expr:
    """
    Coerces a Python value into an Expr.

    Args:
        value: An Expr, a GLSL source string, a real number, or a
               length-3 sequence / numpy array.
        type (str, optional): 'float' or 'vec3'. If given, the coerced
                              expression must not have a different type.
    """
    if isinstance(value, Expr):
        expr = value
    elif isinstance(value, str):
        expr = Raw(value)
    elif isinstance(value, numbers.Real) and not isinstance(value, bool):
        expr = Float(value)
    elif isinstance(value, (list, tuple, np.ndarray)):
        components = np.asarray(value, dtype=object).flatten()
        if len(components) != 3:
            raise ValueError(f"Vector expressions need 3 components, got {len(components)}")
        expr = Vec3(*components)
    else:
        raise TypeError(f"Cannot use {value!r} as a GLSL expression")

    if type is not None and expr.type is not None and expr.type != type:
        raise TypeError(f"Expected a {type} expression, got {expr.type}: {expr.to_glsl()}")
    return expr


ORIGIN = Vec3(0, 0, 0)
