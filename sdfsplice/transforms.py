from abc import abstractmethod
from .core import SceneNode, chain
from .expr import as_expr


class Transform(SceneNode):
    """
    Changes the point space a child is evaluated in.

    A transform declares no variables of its own: it reserves no id and
    reports its child's identifiers.
    """
    def __init__(self, child: SceneNode):
        if not isinstance(child, SceneNode):
            raise TypeError(f"Transforms wrap a SceneNode, got {type(child).__name__}")
        self.child = child

    def unwrap(self):
        """
        Returns the first non-transform descendant and the mappings met on
        the way, outermost first.
        """
        mappings = []
        node = self
        while isinstance(node, Transform):
            mappings.append(node.mapping())
            node = node.child
        return node, mappings

    @property
    def id(self):
        return self.unwrap()[0].id

    def id_range(self):
        return None

    def identifier(self, prop: str) -> str:
        return self.unwrap()[0].identifier(prop)

    def compile(self, transform, output, prop: str):
        # Nested transforms are collapsed into one mapping, innermost first.
        node, mappings = self.unwrap()
        node.compile(chain(list(reversed(mappings)) + [transform]), output, prop)

    def children(self):
        yield self.child

    @abstractmethod
    def mapping(self):
        """Returns this transform's own text-to-text mapping."""
        raise NotImplementedError


class Translate(Transform):
    def __init__(self, offset, child: SceneNode):
        super().__init__(child)
        self.offset = as_expr(offset, 'vec3')

    def mapping(self):
        offset = self.offset.to_glsl()
        return lambda expr: f"({expr} + {offset})"
