import logging

from data_types import DirectedEdge, FaceEdgeTriple, Mesh3d
from graphs import graph_from_undirected_edges

logger = logging.getLogger(__name__)


def get_edges_with_missing_neighbour(mesh: Mesh3d) -> list[DirectedEdge]:
    """
    Return the edges owned by exactly one face, i.e. the mesh boundary.
    Each edge keeps the direction in which its face winds it.
    """
    adjacency = FaceEdgeTriple.build_adjacency_map(mesh.to_face_edge_triples())
    return [edge for edge, faces in adjacency.items() if len(faces) == 1]


def get_non_manifold_edges(mesh: Mesh3d) -> list[DirectedEdge]:
    """Return every edge that is not shared by exactly two faces (boundary edges included)."""
    adjacency = FaceEdgeTriple.build_adjacency_map(mesh.to_face_edge_triples())
    return [edge for edge, faces in adjacency.items() if len(faces) != 2]


def is_mesh_connected(mesh: Mesh3d) -> bool:
    """Whether every vertex of the mesh can be reached from every other through face edges."""
    graph = graph_from_undirected_edges(mesh.number_of_vertices, mesh.to_edges())
    return graph.is_connected()


def get_boundary_loops(mesh: Mesh3d) -> list[list[int]]:
    """
    Given a mesh, return its boundary loops as lists of ordered vertex indices.

    Boundary edges are treated as undirected, so faces wound inconsistently
    still close their loop. Each loop starts at its smallest vertex and first
    steps along the boundary edge seen first at that vertex.
    """
    boundary_edges = get_edges_with_missing_neighbour(mesh)
    if boundary_edges and len(boundary_edges) == 3 * mesh.number_of_faces:
        logger.warning("No two faces share an edge; the mesh may need welding")

    graph = graph_from_undirected_edges(mesh.number_of_vertices, boundary_edges)

    loops = []
    for component in graph.split_disconnected_components():
        # Interior vertices end up as single-vertex components, which are not loops
        if len(component) <= 2:
            continue
        loops.append(_walk_boundary(graph.out_vertices, component[0]))

    logger.debug("Found %d boundary edges forming %d loops", len(boundary_edges), len(loops))
    return loops


def _walk_boundary(out_vertices, start):
    path = [start]
    seen = {start}
    previous, current = None, start
    while True:
        step = next((v for v in out_vertices[current] if v != previous and v not in seen), None)
        if step is None:
            return path
        path.append(step)
        seen.add(step)
        previous, current = current, step
