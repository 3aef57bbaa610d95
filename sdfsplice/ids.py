import threading


class IdAllocator:
    """
    Hands out blocks of integer identifiers for generated GLSL variables.

    One allocator is owned by whoever builds a scene tree and is passed to
    every node that declares variables. Ranges are disjoint and strictly
    increasing in reservation order, so names derived from them never
    collide within a tree. Build a given tree from a single thread.
    """
    def __init__(self, start: int = 0):
        self.start = start
        self.next_id = start
        self._lock = threading.Lock()

    def reserve(self, n: int = 1) -> int:
        """Reserves `n` consecutive ids and returns the first one."""
        if n < 1:
            raise ValueError(f"Must reserve at least one id, got {n}")
        with self._lock:
            first = self.next_id
            self.next_id += n
        return first

    def reset(self):
        with self._lock:
            self.next_id = self.start
