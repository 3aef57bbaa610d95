from .builder import SceneBuilder
from .material import Material


def main(builder: SceneBuilder = None):
    """A sphere carved by a smooth blob, standing over a checkered floor."""
    b = builder if builder is not None else SceneBuilder()
    grey = Material((0.3, 0.3, 0.3))
    checker = Material("vec3(clamp(mod(floor(point.x * 10.0) + floor(point.z * 10.0), 2.0), 0.2, 0.5))")

    blob = b.union(0.2, [
        b.sphere(0.2, Material((0, 0, 1))),
        b.sphere(0.5).translate((0.4, 0.2, 0.0)),
        b.sphere("sin(iTime) * 0.1 + 0.15", Material((1, 0, 0))).translate((-0.1, 0.3, 0.0)),
    ])
    carved = b.difference(0.15, [
        blob,
        b.sphere(0.25, grey).translate((0.4, 0.2, -0.2)),
        b.sphere(0.25, grey).translate((0.4, 0.2, 0.2)),
    ])
    stage = b.union(0.08, [
        carved.translate((-0.2, 0, 0)),
        b.ground(checker).translate((0, -0.2, 0)),
    ])
    return b.cut(0.01, [
        b.sphere(1, Material((0.2, 0.2, 0.2))),
        stage.translate((0, -0.2, 0)),
    ]).translate((0, 0.1, 1.5))
