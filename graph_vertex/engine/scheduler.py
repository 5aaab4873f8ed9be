r"""
Task scheduler tracking which vertices run in the next iteration.

    from graph_vertex.engine.scheduler import TaskScheduler

    scheduler = TaskScheduler(num_vertices=10)
    scheduler.remove(0, 9)
    scheduler.add(3)
"""

import threading

__all__ = ["TaskScheduler"]


class TaskScheduler:
    """Set of active vertex ids shared by every interval of an iteration.

    All vertices start active. Adds and removes apply immediately, so a
    vertex added ahead of the cursor of the interval being processed runs
    in the same pass. Ids added during an iteration stay active for the
    next one even if they removed themselves later in the same iteration.

    A disabled scheduler reports every vertex as active and ignores
    add/remove.
    """

    def __init__(self, num_vertices: int, *, enabled: bool = True) -> None:
        self._num_vertices = num_vertices
        self._enabled = enabled
        self._lock = threading.Lock()
        self._active: set[int] = set(range(num_vertices)) if enabled else set()
        self._added: set[int] = set()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def add(self, vertex_id: int) -> None:
        """Activate a vertex. Idempotent."""
        if not self._enabled:
            return
        with self._lock:
            self._active.add(vertex_id)
            self._added.add(vertex_id)

    def remove(self, lo: int, hi: int) -> None:
        """Deactivate every vertex id in [lo, hi]."""
        if not self._enabled or hi < lo:
            return
        with self._lock:
            if hi - lo < len(self._active):
                for vertex_id in range(lo, hi + 1):
                    self._active.discard(vertex_id)
            else:
                self._active = {v for v in self._active if not lo <= v <= hi}

    def is_active(self, vertex_id: int) -> bool:
        if not self._enabled:
            return 0 <= vertex_id < self._num_vertices
        with self._lock:
            return vertex_id in self._active

    def begin_iteration(self) -> None:
        """Start tracking adds for a new iteration."""
        with self._lock:
            self._added.clear()

    def end_iteration(self) -> None:
        """Commit the iteration: every id added during it stays active."""
        with self._lock:
            self._active |= self._added
            self._added.clear()

    def active_ids(self) -> list[int]:
        """Sorted list of active vertex ids."""
        if not self._enabled:
            return list(range(self._num_vertices))
        with self._lock:
            return sorted(self._active)

    def clear(self) -> None:
        """Deactivate every vertex."""
        with self._lock:
            self._active.clear()
            self._added.clear()

    def __len__(self) -> int:
        """Number of vertices that will run in the next iteration."""
        if not self._enabled:
            return self._num_vertices
        with self._lock:
            return len(self._active | self._added)

    def __repr__(self) -> str:
        state = "enabled" if self._enabled else "disabled"
        return f"TaskScheduler({state}, active={len(self)})"
