"""
Two blobs joined over a floor.

    sdfsplice --scene examples/scene.py -o scene.frag --watch
"""
from sdfsplice import SceneBuilder, Material


def main():
    b = SceneBuilder()
    blobs = b.union(0.25, [
        b.sphere(0.4, Material((0.9, 0.3, 0.2))).translate((-0.3, 0, 0)),
        b.sphere(0.3, Material((0.2, 0.4, 0.9))).translate((0.35, 0.1, 0)),
        b.sphere("0.15 + 0.05 * sin(iTime)", Material((1, 1, 0.3))).translate((0, 0.45, 0)),
    ])
    floor = b.ground(Material((0.6, 0.6, 0.6))).translate((0, -0.4, 0))
    return b.union(0.1, [blobs, floor]).translate((0, 0, 2.5))


if __name__ == "__main__":
    from sdfsplice import compile_template
    print(compile_template(main()))
