"""
Directed adjacency graph over integer vertices, with breadth-first connectivity queries.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Optional

import networkx as nx

from data_types import DirectedEdge, FaceNeighbours, FaceNeighboursAngle
from topology.errors import IndexOutOfRange, LengthMismatch
from .bfs import BFSState, breadth_first_search

logger = logging.getLogger(__name__)


class AdjacencyGraph:
    """
    Directed graph stored as an edge list plus two adjacency indexes.

    `out_vertices[v]` lists the end vertex of every edge starting at `v`, in edge
    insertion order; `out_edge_ids[v]` lists the positions of those edges in
    `edges`. An undirected graph is represented by inserting both directions.
    """

    def __init__(self, vertex_count: int):
        if vertex_count < 0:
            raise ValueError(f"vertex_count must be non-negative, got {vertex_count}")
        self.vertex_count = vertex_count
        self.edges: list[DirectedEdge] = []
        self.out_vertices: list[list[int]] = [[] for _ in range(vertex_count)]
        self.out_edge_ids: list[list[int]] = [[] for _ in range(vertex_count)]

    def add_edge(self, edge: DirectedEdge):
        """Append an edge and extend both adjacency indexes with it."""
        for vertex in (edge.start, edge.end):
            if not 0 <= vertex < self.vertex_count:
                raise IndexOutOfRange(vertex, self.vertex_count)
        edge_id = len(self.edges)
        self.edges.append(edge)
        self.out_vertices[edge.start].append(edge.end)
        self.out_edge_ids[edge.start].append(edge_id)

    def is_connected(self) -> bool:
        """
        Whether every vertex is reachable from vertex 0.

        Only meaningful for a symmetric edge set: directions are followed as stored.
        """
        if self.vertex_count == 0:
            return True
        state = breadth_first_search(self.out_vertices, 0, BFSState.for_vertex_count(self.vertex_count))
        return all(state.visited)

    def split_disconnected_components(self) -> list[list[int]]:
        """Return the vertices of each component (ascending), in discovery order."""
        return [sorted(component) for component, _ in self._search_components()]

    def split_disconnected_loops(self) -> list[list[int]]:
        """
        Return one ordered vertex path per component with more than two vertices.

        Each path starts at the component's search root and follows the
        breadth-first predecessor links forward, which restores the cyclic order
        of a graph built from a closed polygon. Components of one or two vertices
        are left out.
        """
        loops = []
        for component, state in self._search_components():
            if len(component) <= 2:
                continue
            successor = {}
            for vertex in component:
                previous = state.previous_vertex[vertex]
                if previous is not None and previous not in successor:
                    successor[previous] = vertex

            path = [component[0]]
            while path[-1] in successor:
                path.append(successor[path[-1]])
            loops.append(path)
        return loops

    def _search_components(self):
        # Yields each component's vertices in BFS discovery order; its root comes first
        state = BFSState.for_vertex_count(self.vertex_count)
        for vertex in range(self.vertex_count):
            if state.visited[vertex]:
                continue
            visited_before = len(state.order)
            breadth_first_search(self.out_vertices, vertex, state)
            yield state.order[visited_before:], state

    def to_networkx(self) -> nx.MultiDiGraph:
        graph = nx.MultiDiGraph()
        graph.add_nodes_from(range(self.vertex_count))
        for edge_id, edge in enumerate(self.edges):
            graph.add_edge(edge.start, edge.end, key=edge_id)
        return graph

    def __eq__(self, other):
        if not isinstance(other, AdjacencyGraph):
            return NotImplemented
        return self.edges == other.edges

    def __repr__(self):
        return f"AdjacencyGraph(vertices={self.vertex_count}, edges={len(self.edges)})"


def graph_from_edges(vertex_count: Optional[int], edges: Iterable[DirectedEdge]) -> AdjacencyGraph:
    """
    Build a graph from directed edges, in the given order.
    If `vertex_count` is None it is taken as the largest vertex index plus one.
    """
    edges = list(edges)
    if vertex_count is None:
        vertex_count = max(DirectedEdge.flatten(edges), default=-1) + 1
    graph = AdjacencyGraph(vertex_count)
    for edge in edges:
        graph.add_edge(edge)
    return graph


def graph_from_undirected_edges(vertex_count: Optional[int], edges: Iterable[DirectedEdge]) -> AdjacencyGraph:
    """Build a symmetric graph holding both directions of every input edge exactly once."""
    return graph_from_edges(vertex_count, DirectedEdge.unique_undirected(edges))


def graph_from_face_neighbours(face_neighbours: Sequence[FaceNeighbours]) -> AdjacencyGraph:
    """Build the dual graph: one vertex per face, one edge face -> neighbour per filled slot."""
    graph = AdjacencyGraph(len(face_neighbours))
    for face, entry in enumerate(face_neighbours):
        for neighbour in entry:
            if neighbour is not None:
                graph.add_edge(DirectedEdge(face, neighbour))
    logger.debug("Dual graph has %d faces and %d edges", graph.vertex_count, len(graph.edges))
    return graph


def graph_from_face_neighbours_with_max_angle(
    face_neighbours: Sequence[FaceNeighbours],
    angles: Sequence[FaceNeighboursAngle],
    max_angle: float,
) -> AdjacencyGraph:
    """
    Build the dual graph, leaving out every edge whose paired angle exceeds `max_angle`.

    Parameters
    ----------
    face_neighbours : Sequence[FaceNeighbours]
        Neighbour table of the mesh.
    angles : Sequence[FaceNeighboursAngle]
        Angle table aligned with `face_neighbours`, in radians.
    max_angle : float
        Largest angle (radians) across which two faces stay connected.
    """
    if len(face_neighbours) != len(angles):
        raise LengthMismatch(len(face_neighbours), len(angles), what="face neighbours and angles")

    graph = AdjacencyGraph(len(face_neighbours))
    for face, (entry, entry_angles) in enumerate(zip(face_neighbours, angles)):
        for neighbour, angle in zip(entry, entry_angles):
            if neighbour is None:
                continue
            if angle is not None and angle > max_angle:
                continue
            graph.add_edge(DirectedEdge(face, neighbour))
    return graph


def graph_from_closed_polygon(polygon: Sequence) -> AdjacencyGraph:
    """Build a directed cycle 0 -> 1 -> ... -> n-1 -> 0 over the vertices of a closed polygon."""
    vertex_count = len(polygon)
    graph = AdjacencyGraph(vertex_count)
    for i in range(vertex_count):
        graph.add_edge(DirectedEdge(i, (i + 1) % vertex_count))
    return graph
