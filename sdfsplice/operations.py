from .core import SceneNode, InvalidPropertyError, declaration
from .expr import as_expr


class BinaryOperator(SceneNode):
    """
    Folds two or more children pairwise, left to right.

    The node reserves one id per child: its own, plus one for each
    intermediate result. With ids `n .. n+k-1` the intermediates are
    `n+1 .. n+k-1` and the final alias is `n`.
    """
    def __init__(self, ids, smoothing, children: list):
        children = list(children)
        if len(children) < 2:
            raise ValueError(f"{type(self).__name__} needs at least two children, got {len(children)}")
        for child in children:
            if not isinstance(child, SceneNode):
                raise TypeError(f"{type(self).__name__} children must be SceneNodes, got {type(child).__name__}")
        if len({id(child) for child in children}) != len(children):
            raise ValueError(f"{type(self).__name__} received the same child more than once")
        super().__init__(ids, reserve=len(children))
        self.smoothing = as_expr(smoothing, 'float')
        self.operands = children

    def children(self):
        return iter(self.operands)

    def step_identifier(self, step: int):
        """Returns the naming function for the intermediate result of `step`."""
        base = self.id + step
        return lambda prop: f"{prop}{base}"

    def compile(self, transform, output, prop: str):
        for child in self.operands:
            child.compile(transform, output, prop)

        last = self.operands[0].identifier
        for step, child in enumerate(self.operands[1:], start=1):
            current = self.step_identifier(step)
            expr = self.combine(prop, last, child.identifier, current)
            output.write(declaration(prop, current(prop), expr))
            last = current

        self.write_property(output, prop, last(prop))

    def blend(self, a: str, b: str, dist_a: str, dist_b: str, dist: str) -> str:
        """Mixes two vec3 values weighted by how close each distance is to `dist`."""
        return f"blend3({a}, {b}, {dist_a}, {dist_b}, {dist}, {self.smoothing.to_glsl()})"

    def combine(self, prop: str, left, right, current) -> str:
        """
        Returns the GLSL expression combining two operands.

        `left`, `right` and `current` map a property to the variable name
        holding it for the accumulated result, the next child, and this
        fold step.
        """
        raise NotImplementedError


class Union(BinaryOperator):
    def combine(self, prop, left, right, current):
        k = self.smoothing.to_glsl()
        if prop == "sdf":
            return f"smin({left('sdf')}, {right('sdf')}, {k})"
        if prop in ("normal", "color"):
            return self.blend(left(prop), right(prop), left("sdf"), right("sdf"), current("sdf"))
        raise InvalidPropertyError(Union, prop)


class Difference(BinaryOperator):
    """Subtracts every further child from the first."""
    def combine(self, prop, left, right, current):
        k = self.smoothing.to_glsl()
        if prop == "sdf":
            return f"smax({left('sdf')}, -{right('sdf')}, {k})"
        if prop == "normal":
            return self.blend(left(prop), f"-{right(prop)}", left("sdf"), f"-{right('sdf')}", current("sdf"))
        if prop == "color":
            return self.blend(left(prop), right(prop), left("sdf"), right("sdf"), current("sdf"))
        raise InvalidPropertyError(Difference, prop)


class Cut(BinaryOperator):
    """Keeps only the volume shared by all children."""
    def combine(self, prop, left, right, current):
        k = self.smoothing.to_glsl()
        if prop == "sdf":
            return f"smax({left('sdf')}, {right('sdf')}, {k})"
        if prop in ("normal", "color"):
            return self.blend(left(prop), right(prop), left("sdf"), right("sdf"), current("sdf"))
        raise InvalidPropertyError(Cut, prop)
