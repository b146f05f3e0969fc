"""Graph path-finding scenarios over one weighted directed graph."""

from __future__ import annotations

from ..step_types import StructureKind
from ..testing_types import Difficulty, TestCase

GRAPH_INPUT = {
    "vertices": ["A", "B", "C", "D", "E"],
    "edges": [
        {"from": "A", "to": "B", "weight": 4},
        {"from": "A", "to": "C", "weight": 2},
        {"from": "B", "to": "D", "weight": 5},
        {"from": "C", "to": "B", "weight": 1},
        {"from": "C", "to": "D", "weight": 8},
        {"from": "C", "to": "E", "weight": 10},
        {"from": "D", "to": "E", "weight": 2},
    ],
    "directed": True,
}

# Lowest total weight A -> E: 2 + 1 + 5 + 2 = 10
GRAPH_SHORTEST_PATH = ["A", "C", "B", "D", "E"]

ANY_PATH_ASSERTIONS = """\
expect(result[0]).to_be("A")
expect(result[-1]).to_be("E")
expect(len(result)).to_be_greater_than_or_equal(2)
"""

DFS_REFERENCE = '''\
def find_path(graph, start, end):
    graph.dfs(start)
    visited = set()
    path = []

    def walk(vertex):
        visited.add(vertex)
        path.append(vertex)
        if vertex == end:
            return True
        for neighbor in graph.get_neighbors(vertex):
            if neighbor not in visited and walk(neighbor):
                return True
        path.pop()
        return False

    return path if walk(start) else None
'''

DIJKSTRA_REFERENCE = '''\
import heapq


def find_path(graph, start, end):
    graph.bfs(start)
    distances = {start: 0}
    previous = {}
    heap = [(0, start)]
    done = set()
    while heap:
        distance, vertex = heapq.heappop(heap)
        if vertex in done:
            continue
        done.add(vertex)
        if vertex == end:
            break
        for neighbor in graph.get_neighbors(vertex):
            candidate = distance + graph.edge_weight(vertex, neighbor)
            if candidate < distances.get(neighbor, float("inf")):
                distances[neighbor] = candidate
                previous[neighbor] = vertex
                heapq.heappush(heap, (candidate, neighbor))
    if end not in distances:
        return None
    path = [end]
    while path[-1] != start:
        path.append(previous[path[-1]])
    return path[::-1]
'''

PATH_SKELETON = '''\
def find_path(graph, start, end):
    # graph.get_neighbors(vertex) lists outgoing neighbors.
    # graph.edge_weight(a, b) gives the weight of the edge a -> b.
    return None
'''

GRAPH_TESTS = [
    TestCase(
        id="graph-path-easy",
        name="Find Path (Easy)",
        difficulty=Difficulty.EASY,
        structure=StructureKind.GRAPH,
        description="Find any path between two vertices; built-in traversals are allowed.",
        initial_data=GRAPH_INPUT,
        additional_args=["A", "E"],
        expected_output=GRAPH_SHORTEST_PATH,
        assertions=ANY_PATH_ASSERTIONS,
        reference_solution='''\
def find_path(graph, start, end):
    return graph.shortest_path(start, end)
''',
        skeleton_code='''\
def find_path(graph, start, end):
    # graph.shortest_path(start, end) runs a breadth-first search.
    return None
''',
        hints=["graph.shortest_path(start, end) returns a list of vertices"],
        acceptance_criteria=["The path starts at A and ends at E"],
    ),
    TestCase(
        id="graph-path-medium",
        name="Find Path (Medium)",
        difficulty=Difficulty.MEDIUM,
        structure=StructureKind.GRAPH,
        description="Find a path between two vertices with depth-first search.",
        initial_data=GRAPH_INPUT,
        additional_args=["A", "E"],
        expected_output=GRAPH_SHORTEST_PATH,
        assertions=ANY_PATH_ASSERTIONS,
        reference_solution=DFS_REFERENCE,
        skeleton_code=PATH_SKELETON,
        hints=[
            "Keep the current path on a list and pop when backtracking",
            "Track visited vertices so cycles do not trap the search",
        ],
        acceptance_criteria=["The path starts at A and ends at E"],
    ),
    TestCase(
        id="graph-path-hard",
        name="Find Path (Hard)",
        difficulty=Difficulty.HARD,
        structure=StructureKind.GRAPH,
        description="Find the lowest-weight path between two vertices with Dijkstra's algorithm.",
        initial_data=GRAPH_INPUT,
        additional_args=["A", "E"],
        expected_output=GRAPH_SHORTEST_PATH,
        assertions="expect(result).to_equal(expected)",
        reference_solution=DIJKSTRA_REFERENCE,
        skeleton_code=PATH_SKELETON,
        hints=[
            "heapq gives you a priority queue of (distance, vertex)",
            "Record each vertex's predecessor to rebuild the path",
        ],
        acceptance_criteria=["Returns A, C, B, D, E (total weight 10)"],
    ),
]
