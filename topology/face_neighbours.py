"""
Face neighbour tables: which face lies across each edge of every triangle.
"""

import logging
from collections.abc import Sequence

import numpy as np
import trimesh

from data_types import FaceEdgeTriple, FaceNeighbours, FaceNeighboursAngle, Mesh3d
from .errors import InvariantViolation, LengthMismatch, NonManifoldEdge

logger = logging.getLogger(__name__)


def face_neighbours_from_mesh(mesh: Mesh3d) -> list[FaceNeighbours]:
    """Build the face neighbour table of a triangle mesh."""
    return face_neighbours_from_triples(mesh.to_face_edge_triples())


def face_neighbours_from_triples(triples: Sequence[FaceEdgeTriple]) -> list[FaceNeighbours]:
    """
    Build the face neighbour table from the edge triples of every face.

    Parameters
    ----------
    triples : Sequence[FaceEdgeTriple]
        One triple per face, aligned with the face list.

    Returns
    -------
    list[FaceNeighbours]
        One entry per face. Each slot holds the index of the face across the
        corresponding edge, or None if that edge lies on the mesh boundary.

    Raises
    ------
    InvariantViolation
        If the adjacency map holds an edge without owning faces, or an owning
        face does not contain the edge it was recorded under.
    NonManifoldEdge
        If an edge is shared by more than two faces.
    """
    adjacency = FaceEdgeTriple.build_adjacency_map(triples)
    neighbours = [FaceNeighbours() for _ in range(len(triples))]
    logger.debug("Built adjacency map of %d edges for %d faces", len(adjacency), len(triples))

    for edge, faces in adjacency.items():
        if len(faces) == 0:
            raise InvariantViolation(f"Adjacency map malformed: edge ({edge.start}, {edge.end}) has no faces")
        if len(faces) == 1:
            continue
        if len(faces) > 2:
            logger.warning("Non-manifold edge (%d, %d) shared by faces %s", edge.start, edge.end, faces)
            raise NonManifoldEdge(edge, faces)

        face_a, face_b = faces
        for face, other in ((face_a, face_b), (face_b, face_a)):
            slot = triples[face].slot_of(edge)
            if slot is None:
                raise InvariantViolation(
                    f"Adjacency map malformed: face {face} does not contain edge ({edge.start}, {edge.end})"
                )
            neighbours[face][slot] = other

    return neighbours


def face_neighbour_angles(face_neighbours: Sequence[FaceNeighbours], mesh: Mesh3d) -> list[FaceNeighboursAngle]:
    """
    Return, for every face and edge slot, the angle (radians) between the face normal
    and the normal of the neighbouring face across that slot.
    """
    if len(face_neighbours) != mesh.number_of_faces:
        raise LengthMismatch(mesh.number_of_faces, len(face_neighbours), what="face neighbours and mesh faces")

    triangles = mesh.vertices[mesh.faces]
    normals = trimesh.util.unitize(np.cross(triangles[:, 1] - triangles[:, 0], triangles[:, 2] - triangles[:, 0]))

    angles = [FaceNeighboursAngle() for _ in range(len(face_neighbours))]
    for face, entry in enumerate(face_neighbours):
        for slot, neighbour in enumerate(entry):
            if neighbour is None:
                continue
            pair = np.array([[normals[face], normals[neighbour]]])
            angles[face][slot] = float(trimesh.geometry.vector_angle(pair)[0])
    return angles
