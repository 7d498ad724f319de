from collections import deque
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class BFSState:
    """Bookkeeping shared by consecutive breadth-first searches over one graph."""
    visited: list[bool]
    previous_vertex: list[Optional[int]]
    order: list[int] = field(default_factory=list)

    @classmethod
    def for_vertex_count(cls, vertex_count: int) -> "BFSState":
        return cls(visited=[False] * vertex_count, previous_vertex=[None] * vertex_count)


def breadth_first_search(out_vertices: list[list[int]], start_vertex: int, state: BFSState) -> BFSState:
    """
    Visit every vertex reachable from `start_vertex` that `state` has not seen yet.

    Neighbours are visited in the order they appear in `out_vertices[v]`, so the
    traversal order depends only on edge insertion order. `state` is updated in
    place and returned.
    """
    queue = deque([start_vertex])
    state.visited[start_vertex] = True
    state.order.append(start_vertex)

    while queue:
        vertex = queue.popleft()
        for neighbour in out_vertices[vertex]:
            if state.visited[neighbour]:
                continue
            state.visited[neighbour] = True
            state.previous_vertex[neighbour] = vertex
            state.order.append(neighbour)
            queue.append(neighbour)

    return state
