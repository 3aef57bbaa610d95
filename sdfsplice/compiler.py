import re
from pathlib import Path
from .core import (
    PROPERTY_TYPES, SceneCompileError, SceneTooDeepError, UnknownPropertyError, declaration, identity
)
from .output import LineOutput

DEFAULT_TEMPLATE = Path(__file__).parent / 'glsl' / 'main.frag'

# A directive occupies a whole line: optional tabs, then `#evaluate <prop>`.
DIRECTIVE = re.compile(r"^(\t*)#evaluate\s+<(\w+)>$")


class Evaluation:
    """The outcome of evaluating one property of a scene."""
    def __init__(self, prop: str, lines: list, error: SceneCompileError = None):
        self.prop = prop
        self.lines = lines
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def comment(self) -> str:
        """The inert GLSL comment standing in for a failed evaluation."""
        if isinstance(self.error, UnknownPropertyError):
            return f"/* unknown property: {self.prop} */"
        return f"/* error: {self.error} */"


def evaluate(scene, prop: str, validate: bool = True) -> Evaluation:
    """
    Generates the declarations for one property of `scene`.

    On success the lines end with an alias binding the bare property name
    to the root's variable. Lines written before a failure are kept.
    Malformed trees raise ValueError unless `validate` is False.
    """
    if validate:
        validate_tree(scene)
    if prop not in PROPERTY_TYPES:
        return Evaluation(prop, [], UnknownPropertyError(prop))
    output = LineOutput()
    try:
        scene.compile(identity, output, prop)
    except SceneCompileError as e:
        return Evaluation(prop, output.lines, e)
    except RecursionError:
        return Evaluation(prop, output.lines, SceneTooDeepError())
    output.write(declaration(prop, prop, scene.identifier(prop)))
    return Evaluation(prop, output.lines)


def parse_directive(line: str):
    """Returns (property, indent) for a directive line, or (None, 0)."""
    match = DIRECTIVE.match(line.rstrip())
    if match:
        return match.group(2), len(match.group(1))
    return None, 0


def validate_tree(scene):
    """
    Raises ValueError if a node object is reachable more than once, or if
    two nodes declare variables from overlapping id blocks (as happens when
    a tree mixes nodes from different allocators).
    """
    seen = set()
    ranges = []
    for node in scene.walk():
        if id(node) in seen:
            raise ValueError(f"{type(node).__name__} appears more than once in the scene graph")
        seen.add(id(node))
        block = node.id_range()
        if block is not None:
            ranges.append((block, node))

    ranges.sort(key=lambda item: item[0].start)
    for (prev, prev_node), (block, node) in zip(ranges, ranges[1:]):
        if block.start < prev.stop:
            raise ValueError(
                f"{type(node).__name__} and {type(prev_node).__name__} both declare "
                f"variables with id {block.start}; build one tree with one IdAllocator")


class TemplateCompiler:
    """Splices generated scene code into a shader template."""
    def __init__(self, template):
        if isinstance(template, str):
            template = template.split("\n")
        self.lines = list(template)

    @classmethod
    def from_path(cls, path) -> 'TemplateCompiler':
        return cls(Path(path).read_text())

    @classmethod
    def default(cls) -> 'TemplateCompiler':
        return cls.from_path(DEFAULT_TEMPLATE)

    def replace(self, output, prop: str, scene):
        result = evaluate(scene, prop, validate=False)
        for line in result.lines:
            output.write(line)
        if not result.ok:
            output.write(result.comment())
        return result

    def compile(self, scene, output) -> list:
        """
        Writes the template to `output`, replacing every directive.

        Returns the Evaluation of each directive, in template order.
        """
        validate_tree(scene)
        results = []
        for line in self.lines:
            prop, indent = parse_directive(line)
            if prop is None:
                output.write(line)
                continue
            output.push_indent(indent)
            try:
                results.append(self.replace(output, prop, scene))
            finally:
                output.pop_indent(indent)
        return results


def compile_template(scene, template=None) -> str:
    """
    Compiles `scene` into a template and returns the resulting source.

    Args:
        scene (SceneNode): Root of the scene graph.
        template (str or list, optional): Template text or lines. Defaults to
                                          the bundled raymarching shader.
    """
    compiler = TemplateCompiler.default() if template is None else TemplateCompiler(template)
    output = LineOutput()
    compiler.compile(scene, output)
    return output.getvalue()
