from abc import ABC, abstractmethod
from typing import Callable, Iterator

# GLSL type declared for each property a scene can evaluate.
PROPERTY_TYPES = {
    "sdf": "float",
    "normal": "vec3",
    "color": "vec3",
}

TransformFunction = Callable[[str], str]


def identity(expr: str) -> str:
    return expr


def compose(f: TransformFunction, g: TransformFunction) -> TransformFunction:
    """Returns a mapping that applies `f` first, then `g`."""
    return chain([f, g])


def chain(mappings) -> TransformFunction:
    """Returns a mapping that applies each of `mappings` in order."""
    mappings = list(mappings)

    def apply(expr: str) -> str:
        for mapping in mappings:
            expr = mapping(expr)
        return expr
    return apply


def declaration(prop: str, name: str, expr: str) -> str:
    """Formats a GLSL declaration of `name` with the type of `prop`."""
    return f"{PROPERTY_TYPES[prop]} {name} = {expr};"


class SceneCompileError(Exception):
    """Base class for errors raised while generating GLSL for a scene."""


class InvalidPropertyError(SceneCompileError):
    """Raised when an object is asked for a property it cannot produce."""
    def __init__(self, owner, prop: str):
        self.owner = owner
        self.prop = prop
        name = owner.__name__ if isinstance(owner, type) else type(owner).__name__
        super().__init__(f"property {prop} not supported by {name}")


class SceneTooDeepError(SceneCompileError):
    """Raised when a scene is nested too deeply to compile."""
    def __init__(self):
        super().__init__("scene graph nested too deeply to compile")


class UnknownPropertyError(SceneCompileError):
    """Raised when a property tag is not one of PROPERTY_TYPES."""
    def __init__(self, prop: str):
        self.prop = prop
        super().__init__(f"unknown property: {prop}")


class SceneNode(ABC):
    """Abstract base class for all nodes in the scene graph."""

    def __init__(self, ids, reserve: int = 1):
        self.id = ids.reserve(reserve)
        self.reserved = reserve

    def id_range(self):
        """The block of ids this node declares variables with, or None."""
        return range(self.id, self.id + self.reserved)

    def identifier(self, prop: str) -> str:
        """Name of the GLSL variable this node declares for `prop`."""
        return f"{prop}{self.id}"

    def write_property(self, output, prop: str, expr: str):
        output.write(declaration(prop, self.identifier(prop), expr))

    @abstractmethod
    def compile(self, transform: TransformFunction, output, prop: str):
        """
        Writes the declarations needed to evaluate `prop` for this node.

        Args:
            transform: Accumulated mapping from world space into this node's
                       local space, applied to point-space expressions.
            output (Output): The sink receiving declaration lines.
            prop (str): One of PROPERTY_TYPES.

        The last line written declares `self.identifier(prop)`.
        """
        raise NotImplementedError

    def children(self) -> Iterator['SceneNode']:
        return iter(())

    def walk(self) -> Iterator['SceneNode']:
        """Yields this node and all of its descendants, depth-first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node.children())))

    def translate(self, offset) -> 'SceneNode':
        """Moves this node by `offset`."""
        from .transforms import Translate
        return Translate(offset, self)
