import os
import re
import shutil
import subprocess
import tempfile
import pytest
from sdfsplice import SceneBuilder, IdAllocator, evaluate

GLSL_VALIDATOR = shutil.which("glslangValidator")
SKIP_GLSL = os.environ.get("SKIP_GLSL", "") == "1"

requires_glsl_validator = pytest.mark.skipif(
    not GLSL_VALIDATOR or SKIP_GLSL,
    reason="Requires glslangValidator."
)

DECLARATION = re.compile(r"^\s*(?:float|vec3) ((?:sdf|normal|color)\d*) = ")


@pytest.fixture
def ids():
    return IdAllocator()


@pytest.fixture
def builder(ids):
    return SceneBuilder(ids)


@pytest.fixture
def compile_scene():
    """Returns the generated lines for one property, failing on errors."""
    def _compile(scene, prop):
        result = evaluate(scene, prop)
        assert result.ok, f"Evaluating <{prop}> failed: {result.error}"
        return result.lines
    return _compile


@pytest.fixture
def declared_names():
    """Extracts the names of generated property variables from source lines."""
    def _names(lines):
        if isinstance(lines, str):
            lines = lines.split("\n")
        return [m.group(1) for m in map(DECLARATION.match, lines) if m]
    return _names


@pytest.fixture(scope="session")
def validate_glsl():
    def _validator(shader: str):
        with tempfile.NamedTemporaryFile(suffix=".frag", mode="w", delete=False) as f:
            f.write(shader)
            path = f.name
        try:
            result = subprocess.run([GLSL_VALIDATOR, "-S", "frag", path], capture_output=True, text=True)
        finally:
            os.remove(path)
        if result.returncode != 0:
            raise AssertionError(f"GLSL Validation Failed:\n{result.stdout}{result.stderr}\nSOURCE:\n{shader}")
    return _validator
