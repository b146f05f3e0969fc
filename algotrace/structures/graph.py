"""Adjacency-set graph with step-by-step BFS, DFS and shortest path."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterable, Iterator

from .. import constants
from ..step_types import StepSink, StructureKind
from ._base import TrackedStructure


def _edge_parts(edge: Any) -> tuple[Any, Any, float]:
    if isinstance(edge, dict):
        return edge["from"], edge["to"], edge.get("weight", 1)
    if len(edge) == 3:
        return edge[0], edge[1], edge[2]
    return edge[0], edge[1], 1


class TrackedGraph(TrackedStructure):
    """Graph keyed by vertex; neighbor order is insertion order.

    Undirected graphs mirror each edge into both adjacency entries.
    """

    kind = StructureKind.GRAPH

    def __init__(self, directed: bool = False, sink: StepSink | None = None):
        super().__init__(sink)
        self.directed = directed
        self._adjacency: dict[Any, dict[Any, float]] = {}

    @classmethod
    def from_graph(
        cls,
        vertices: Iterable[Any],
        edges: Iterable[Any] = (),
        directed: bool = False,
        sink: StepSink | None = None,
    ):
        graph = cls(directed=directed)
        for vertex in vertices:
            graph._adjacency.setdefault(vertex, {})
        for edge in edges:
            graph._link(*_edge_parts(edge))
        graph.attach(sink)
        return graph

    def _link(self, source: Any, target: Any, weight: float) -> None:
        self._adjacency.setdefault(source, {})
        self._adjacency.setdefault(target, {})
        self._adjacency[source][target] = weight
        if not self.directed:
            self._adjacency[target][source] = weight

    def has_vertex(self, vertex: Any) -> bool:
        return vertex in self._adjacency

    def vertices(self) -> list[Any]:
        return list(self._adjacency)

    def get_neighbors(self, vertex: Any) -> list[Any]:
        return list(self._adjacency.get(vertex, {}))

    def edge_weight(self, source: Any, target: Any) -> float | None:
        return self._adjacency.get(source, {}).get(target)

    def add_vertex(self, vertex: Any) -> bool:
        if vertex in self._adjacency:
            self._emit(
                "addVertex",
                (vertex,),
                vertex=vertex,
                added=False,
                message=constants.MSG_VERTEX_EXISTS,
            )
            return False
        self._adjacency[vertex] = {}
        self._emit("addVertex", (vertex,), vertex=vertex, added=True)
        return True

    def add_edge(self, source: Any, target: Any, weight: float = 1) -> None:
        self._link(source, target, weight)
        self._emit(
            "addEdge",
            (source, target, weight),
            from_=source,
            to=target,
            weight=weight,
            directed=self.directed,
        )

    def remove_vertex(self, vertex: Any) -> bool:
        if vertex not in self._adjacency:
            self._emit(
                "removeVertex",
                (vertex,),
                vertex=vertex,
                removed=False,
                message=constants.MSG_VERTEX_NOT_FOUND,
            )
            return False
        del self._adjacency[vertex]
        for neighbors in self._adjacency.values():
            neighbors.pop(vertex, None)
        self._emit("removeVertex", (vertex,), vertex=vertex, removed=True)
        return True

    def remove_edge(self, source: Any, target: Any) -> bool:
        if source not in self._adjacency:
            self._emit(
                "removeEdge",
                (source, target),
                from_=source,
                to=target,
                removed=False,
                message=constants.MSG_SOURCE_NOT_FOUND,
            )
            return False
        removed = self._adjacency[source].pop(target, None) is not None
        if removed and not self.directed:
            self._adjacency[target].pop(source, None)
        self._emit(
            "removeEdge", (source, target), from_=source, to=target, removed=removed
        )
        return removed

    def bfs(self, start: Any) -> list[Any]:
        """Breadth-first visit order from ``start``; one step per dequeued vertex."""
        if start not in self._adjacency:
            self._emit(
                "bfs",
                (start,),
                start=start,
                visit_order=[],
                completed=True,
                message=constants.MSG_START_NOT_FOUND,
            )
            return []
        visited = {start: None}
        queue = deque([start])
        order: list[Any] = []
        while queue:
            current = queue.popleft()
            order.append(current)
            for neighbor in self._adjacency[current]:
                if neighbor not in visited:
                    visited[neighbor] = None
                    queue.append(neighbor)
            self._emit(
                "bfs",
                (start,),
                start=start,
                current=current,
                visited=list(visited),
                queue=list(queue),
                visit_order=list(order),
            )
        self._emit("bfs", (start,), start=start, visit_order=order, completed=True)
        return order

    def dfs(self, start: Any) -> list[Any]:
        """Depth-first visit order from ``start``, neighbors in insertion order."""
        if start not in self._adjacency:
            self._emit(
                "dfs",
                (start,),
                start=start,
                visit_order=[],
                completed=True,
                message=constants.MSG_START_NOT_FOUND,
            )
            return []
        visited: dict[Any, None] = {}
        order: list[Any] = []

        def visit(vertex: Any) -> Iterator[Any]:
            visited[vertex] = None
            order.append(vertex)
            self._emit(
                "dfs",
                (start,),
                start=start,
                current=vertex,
                visited=list(visited),
                visit_order=list(order),
            )
            return iter(self._adjacency[vertex])

        # one neighbor iterator per vertex on the current path
        stack = [visit(start)]
        while stack:
            for neighbor in stack[-1]:
                if neighbor not in visited:
                    stack.append(visit(neighbor))
                    break
            else:
                stack.pop()
        self._emit("dfs", (start,), start=start, visit_order=order, completed=True)
        return order

    def _directed_cycle_from(self, root: Any, visited: set) -> Any:
        visited.add(root)
        path = [root]
        on_path = {root}
        stack = [iter(self._adjacency[root])]
        while stack:
            for neighbor in stack[-1]:
                if neighbor in on_path:
                    return neighbor
                if neighbor not in visited:
                    visited.add(neighbor)
                    path.append(neighbor)
                    on_path.add(neighbor)
                    stack.append(iter(self._adjacency[neighbor]))
                    break
            else:
                stack.pop()
                on_path.discard(path.pop())
        return None

    def _undirected_cycle_from(self, root: Any, visited: set) -> Any:
        visited.add(root)
        stack = [(None, iter(self._adjacency[root]))]
        path = [root]
        while stack:
            parent, neighbors = stack[-1]
            for neighbor in neighbors:
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append((path[-1], iter(self._adjacency[neighbor])))
                    path.append(neighbor)
                    break
                if neighbor != parent:
                    return neighbor
            else:
                stack.pop()
                path.pop()
        return None

    def has_cycle(self) -> bool:
        visited: set = set()
        cycle_vertex = None
        for vertex in self._adjacency:
            if vertex in visited:
                continue
            if self.directed:
                cycle_vertex = self._directed_cycle_from(vertex, visited)
            else:
                cycle_vertex = self._undirected_cycle_from(vertex, visited)
            if cycle_vertex is not None:
                break
        has_cycle = cycle_vertex is not None
        self._emit("hasCycle", (), has_cycle=has_cycle, cycle_vertex=cycle_vertex)
        return has_cycle

    def shortest_path(self, start: Any, end: Any) -> list[Any] | None:
        """Unweighted shortest path as a vertex list, or None when unreachable."""
        args = (start, end)
        if start not in self._adjacency or end not in self._adjacency:
            self._emit(
                "shortestPath",
                args,
                start=start,
                end=end,
                found=False,
                completed=True,
                message=constants.MSG_ENDPOINT_NOT_FOUND,
            )
            return None
        visited = {start: None}
        queue = deque([(start, [start])])
        while queue:
            current, path = queue.popleft()
            self._emit(
                "shortestPath",
                args,
                start=start,
                end=end,
                current=current,
                visited=list(visited),
                current_path=list(path),
            )
            if current == end:
                self._emit(
                    "shortestPath",
                    args,
                    start=start,
                    end=end,
                    path=path,
                    found=True,
                    completed=True,
                )
                return path
            for neighbor in self._adjacency[current]:
                if neighbor not in visited:
                    visited[neighbor] = None
                    queue.append((neighbor, path + [neighbor]))
        self._emit(
            "shortestPath",
            args,
            start=start,
            end=end,
            found=False,
            completed=True,
            message=constants.MSG_NO_PATH,
        )
        return None

    def clear(self) -> None:
        previous = len(self._adjacency)
        self._adjacency = {}
        self._emit("clear", (), previous_size=previous, cleared=True)

    def size(self) -> int:
        return len(self._adjacency)

    def edge_count(self) -> int:
        total = sum(len(neighbors) for neighbors in self._adjacency.values())
        return total if self.directed else total // 2

    def snapshot(self) -> list[dict[str, Any]]:
        return [
            {"vertex": vertex, "neighbors": list(neighbors)}
            for vertex, neighbors in self._adjacency.items()
        ]
