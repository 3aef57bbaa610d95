from .expr import Expr, Float, Vec3, Raw, as_expr
from .ids import IdAllocator
from .output import Output, LineOutput, StreamOutput
from .core import (
    PROPERTY_TYPES, SceneNode, SceneCompileError, SceneTooDeepError, InvalidPropertyError,
    UnknownPropertyError, identity, compose
)
from .material import Material
from .primitives import Shape, Sphere, Plane, Ground, Backdrop
from .transforms import Transform, Translate
from .operations import BinaryOperator, Union, Difference, Cut
from .builder import SceneBuilder
from .compiler import TemplateCompiler, Evaluation, evaluate, compile_template
