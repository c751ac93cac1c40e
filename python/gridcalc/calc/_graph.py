"""Dependency graph between cells, with cycle detection."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable


class DependencyGraph:
    """Tracks which cells read which other cells.

    Edges are stored twice: ``dependents`` maps a precedent to the cells
    that read it (used for propagation) and ``precedents`` maps a cell to
    the cells it reads (used for edge removal and cycle checks).
    """

    __slots__ = ("dependents", "precedents")

    def __init__(self) -> None:
        # cell -> set of cells that read from it
        self.dependents: dict[str, set[str]] = {}
        # cell -> set of cells it reads from (reverse edges)
        self.precedents: dict[str, set[str]] = {}

    def add_dependency(self, dependent: str, precedent: str) -> None:
        """Record that *dependent* reads *precedent*."""
        self.dependents.setdefault(precedent, set()).add(dependent)
        self.precedents.setdefault(dependent, set()).add(precedent)

    def remove_all_precedents(self, dependent: str) -> None:
        """Drop every edge where *dependent* is the reading side."""
        for precedent in self.precedents.pop(dependent, set()):
            readers = self.dependents.get(precedent)
            if readers is None:
                continue
            readers.discard(dependent)
            if not readers:
                del self.dependents[precedent]

    def get_precedents(self, dependent: str) -> set[str]:
        return set(self.precedents.get(dependent, ()))

    def get_direct_dependents(self, precedent: str) -> set[str]:
        return set(self.dependents.get(precedent, ()))

    def get_all_dependents(self, precedent: str) -> list[str]:
        """Transitive dependents of *precedent*, breadth-first, each once.

        *precedent* itself only appears if it sits on a cycle.
        """
        result: list[str] = []
        visited: set[str] = set()
        queue: deque[str] = deque([precedent])

        while queue:
            cell = queue.popleft()
            for dep in sorted(self.dependents.get(cell, ())):
                if dep not in visited:
                    visited.add(dep)
                    result.append(dep)
                    queue.append(dep)

        return result

    def has_cycle_through(self, cell: str) -> bool:
        """True if walking precedent edges from *cell* ever revisits the current path.

        This covers *cell* sitting on a cycle as well as *cell* reading,
        directly or not, from one.  Depth-first with an on-path marker that
        is cleared on backtrack, so a cell reached again through a
        different, non-cyclic branch is not mistaken for a cycle.  Cells
        fully explored without finding a cycle are not walked again.
        """
        on_path: set[str] = set()
        finished: set[str] = set()

        def visit(node: str) -> bool:
            on_path.add(node)
            for precedent in self.precedents.get(node, ()):
                if precedent in on_path:
                    return True
                if precedent not in finished and visit(precedent):
                    return True
            on_path.discard(node)
            finished.add(node)
            return False

        return visit(cell)

    def evaluation_order(self, cells: Iterable[str]) -> list[str]:
        """Order *cells* so each follows its precedents within the set (Kahn's algorithm).

        Cells that cannot be ordered because they sit on or behind a cycle
        are appended in their original order.
        """
        ordered_input = list(dict.fromkeys(cells))
        members = set(ordered_input)

        in_degree: dict[str, int] = {
            cell: len(self.precedents.get(cell, set()) & members) for cell in ordered_input
        }
        queue: deque[str] = deque(c for c in ordered_input if in_degree[c] == 0)

        order: list[str] = []
        while queue:
            cell = queue.popleft()
            order.append(cell)
            for dep in sorted(self.dependents.get(cell, ())):
                if dep in members:
                    in_degree[dep] -= 1
                    if in_degree[dep] == 0:
                        queue.append(dep)

        if len(order) != len(ordered_input):
            placed = set(order)
            order.extend(c for c in ordered_input if c not in placed)

        return order

    def edge_count(self) -> int:
        return sum(len(p) for p in self.precedents.values())

    def clear(self) -> None:
        self.dependents.clear()
        self.precedents.clear()
