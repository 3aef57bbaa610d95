from .ids import IdAllocator
from .primitives import Sphere, Plane, Ground, Backdrop
from .transforms import Translate
from .operations import Union, Difference, Cut


class SceneBuilder:
    """
    Creates scene nodes that share one IdAllocator.

    Every tree built through the same builder gets collision-free variable
    names. Use a fresh builder (or `reset()`) to start numbering again.
    """
    def __init__(self, ids: IdAllocator = None):
        self.ids = ids if ids is not None else IdAllocator()

    def reset(self):
        self.ids.reset()

    def sphere(self, radius=1.0, material=None) -> Sphere:
        """
        Creates a sphere centered at the origin.

        Args:
            radius (float or str, optional): The radius. Strings are used as
                                             raw GLSL. Defaults to 1.0.
            material (Material or tuple, optional): Material or (r, g, b)
                                                    color. Defaults to white.
        """
        return Sphere(self.ids, radius, material)

    def plane(self, normal, material=None) -> Plane:
        """Creates a two-sided plane through the origin with the given normal."""
        return Plane(self.ids, normal, material)

    def ground(self, material=None, normal=(0, 1, 0)) -> Ground:
        """Creates a ground half-space, solid below the plane."""
        return Ground(self.ids, material, normal)

    def backdrop(self, material) -> Backdrop:
        return Backdrop(self.ids, material)

    def translate(self, offset, child) -> Translate:
        return Translate(offset, child)

    def union(self, smoothing, children) -> Union:
        """Smoothly joins all children."""
        return Union(self.ids, smoothing, children)

    def difference(self, smoothing, children) -> Difference:
        """Smoothly subtracts children[1:] from children[0]."""
        return Difference(self.ids, smoothing, children)

    def cut(self, smoothing, children) -> Cut:
        """Smoothly intersects all children."""
        return Cut(self.ids, smoothing, children)
