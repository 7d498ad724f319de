from .adjacency_graph import (
    AdjacencyGraph,
    graph_from_closed_polygon,
    graph_from_edges,
    graph_from_face_neighbours,
    graph_from_face_neighbours_with_max_angle,
    graph_from_undirected_edges,
)
from .bfs import BFSState, breadth_first_search
