"""
Tests for the face neighbour table and the per-edge face angles.
"""

import os
import sys
import numpy as np
import pytest

# Add the parent directory to the Python path so we can import the topology module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from data_types import FaceEdgeTriple, FaceNeighbours, FaceNeighboursAngle, Mesh3d
from topology import (
    InvariantViolation,
    LengthMismatch,
    MeshTopologyError,
    NonManifoldEdge,
    face_neighbour_angles,
    face_neighbours_from_mesh,
    face_neighbours_from_triples,
)


def create_fan_mesh():
    """Create a planar mesh of 4 triangles around a middle triangle."""
    coordinates = [
        0.0, 0.0, 0.0,
        2.5, 5.0, 0.0,
        5.0, 0.0, 0.0,
        7.5, 5.0, 0.0,
        10.0, 0.0, 0.0,
        5.0, 10.0, 0.0,
    ]
    indices = [
        0, 2, 1,
        1, 2, 3,
        2, 4, 3,
        1, 3, 5,
    ]
    return Mesh3d(coordinates, indices)


def create_pyramid_mesh():
    """Create a closed pyramid with a square base and apex above its centre."""
    vertices = [
        [0.0, 0.0, 0.0],
        [10.0, 0.0, 0.0],
        [10.0, 10.0, 0.0],
        [0.0, 10.0, 0.0],
        [5.0, 5.0, 4.0],
    ]
    faces = [
        [0, 1, 2],
        [0, 2, 3],
        [0, 1, 4],
        [1, 2, 4],
        [2, 3, 4],
        [3, 0, 4],
    ]
    return Mesh3d.from_vertices_and_faces(vertices, faces)


def create_cube_mesh():
    """Create a closed unit cube, two outward-wound triangles per side."""
    vertices = [
        [0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0],
        [0, 0, 1], [1, 0, 1], [1, 1, 1], [0, 1, 1],
    ]
    faces = [
        [0, 2, 1], [0, 3, 2],  # bottom
        [4, 5, 6], [4, 6, 7],  # top
        [0, 1, 5], [0, 5, 4],  # front
        [3, 7, 6], [3, 6, 2],  # back
        [0, 4, 7], [0, 7, 3],  # left
        [1, 2, 6], [1, 6, 5],  # right
    ]
    return Mesh3d.from_vertices_and_faces(vertices, faces)


def assert_table_is_symmetric(table):
    for face, entry in enumerate(table):
        for neighbour in entry:
            if neighbour is not None:
                assert table[neighbour].which_slot(face) is not None, f"{neighbour} does not point back to {face}"


def test_fan_neighbour_table():
    """The middle triangle neighbours all three others, each of which neighbours only it."""
    table = face_neighbours_from_mesh(create_fan_mesh())
    assert table == [
        FaceNeighbours(None, 1, None),
        FaceNeighbours(0, 2, 3),
        FaceNeighbours(None, None, 1),
        FaceNeighbours(1, None, None),
    ]


def test_pyramid_neighbour_table():
    table = face_neighbours_from_mesh(create_pyramid_mesh())
    assert table == [
        FaceNeighbours(2, 3, 1),
        FaceNeighbours(0, 4, 5),
        FaceNeighbours(0, 3, 5),
        FaceNeighbours(0, 4, 2),
        FaceNeighbours(1, 5, 3),
        FaceNeighbours(1, 2, 4),
    ]
    assert all(entry.has_all_neighbours() for entry in table)


@pytest.mark.parametrize("mesh", [create_fan_mesh(), create_pyramid_mesh(), create_cube_mesh()])
def test_neighbour_table_is_symmetric(mesh):
    assert_table_is_symmetric(face_neighbours_from_mesh(mesh))


def test_from_mesh_matches_from_triples():
    mesh = create_fan_mesh()
    assert face_neighbours_from_mesh(mesh) == face_neighbours_from_triples(mesh.to_face_edge_triples())


def test_inconsistent_winding_still_neighbours():
    """Two faces that wind their shared edge the same way are still neighbours."""
    triples = [FaceEdgeTriple.from_face(0, 1, 2), FaceEdgeTriple.from_face(0, 1, 3)]
    assert face_neighbours_from_triples(triples) == [
        FaceNeighbours(1, None, None),
        FaceNeighbours(0, None, None),
    ]


def test_non_manifold_edge_raises():
    """Edge (0, 1) is shared by three of the five triangles."""
    mesh = Mesh3d.from_vertices_and_faces(
        [[0, 0, 0], [1, 0, 0], [0, 1, 0], [0, -1, 0], [0, 0, 1], [1, 1, 0], [1, -1, 0]],
        [[0, 1, 2], [1, 0, 3], [0, 1, 4], [1, 5, 2], [1, 3, 6]],
    )
    with pytest.raises(NonManifoldEdge) as excinfo:
        face_neighbours_from_mesh(mesh)

    assert excinfo.value.faces == [0, 1, 2]
    assert excinfo.value.edge.equals_undirected(mesh.to_face_edge_triples()[0].first)
    assert isinstance(excinfo.value, MeshTopologyError)


def test_face_missing_its_edge_raises_invariant_violation():
    """A face recorded under an edge it cannot locate makes the adjacency map unusable."""
    triple = FaceEdgeTriple.from_face(0, 1, 2)

    class BlindTriple(FaceEdgeTriple):
        def slot_of(self, edge):
            return None

    with pytest.raises(InvariantViolation):
        face_neighbours_from_triples([triple, BlindTriple(*FaceEdgeTriple.from_face(1, 0, 3))])


def test_empty_triples():
    assert face_neighbours_from_triples([]) == []


def test_face_neighbours_helpers():
    entry = FaceNeighbours(None, 4, 7)
    assert entry[1] == 4
    assert entry.which_slot(7) == 2
    assert entry.which_slot(0) is None
    assert not entry.has_all_neighbours()

    entry[0] = 3
    assert entry.first == 3
    assert entry.has_all_neighbours()


def test_planar_fan_angles_are_zero():
    mesh = create_fan_mesh()
    table = face_neighbours_from_mesh(mesh)
    angles = face_neighbour_angles(table, mesh)

    assert len(angles) == 4
    assert angles[0].first is None and angles[0].third is None
    assert np.isclose(angles[0].second, 0.0)
    assert all(np.isclose(angle, 0.0) for angle in angles[1])


def test_flipped_neighbour_angle_is_pi():
    mesh = create_fan_mesh()
    faces = mesh.faces.copy()
    faces[0] = [1, 2, 0]
    flipped_one = Mesh3d.from_vertices_and_faces(mesh.vertices, faces)

    table = face_neighbours_from_mesh(flipped_one)
    angles = face_neighbour_angles(table, flipped_one)

    slot = table[0].which_slot(1)
    assert np.isclose(angles[0][slot], np.pi)
    assert np.isclose(angles[1][table[1].which_slot(0)], np.pi)


def test_pyramid_base_to_side_angle():
    mesh = create_pyramid_mesh()
    table = face_neighbours_from_mesh(mesh)
    angles = face_neighbour_angles(table, mesh)

    # base normal is +z, face 2 normal is along (0, -40, 50)
    expected = np.arccos(50.0 / np.sqrt(40.0 ** 2 + 50.0 ** 2))
    assert np.isclose(angles[0].first, expected)
    assert isinstance(angles[0], FaceNeighboursAngle)


def test_angles_length_mismatch():
    mesh = create_fan_mesh()
    table = face_neighbours_from_mesh(mesh)
    with pytest.raises(LengthMismatch):
        face_neighbour_angles(table[:-1], mesh)


def test_cube_is_closed():
    table = face_neighbours_from_mesh(create_cube_mesh())
    assert len(table) == 12
    assert all(entry.has_all_neighbours() for entry in table)
    # the two triangles of a side share their diagonal
    for face in range(0, 12, 2):
        assert table[face].which_slot(face + 1) is not None


def test_cube_angles_are_flat_or_right():
    """Each triangle has one coplanar neighbour and two at a right angle."""
    mesh = create_cube_mesh()
    angles = face_neighbour_angles(face_neighbours_from_mesh(mesh), mesh)
    for entry in angles:
        values = sorted(entry)
        np.testing.assert_allclose(values, [0.0, np.pi / 2, np.pi / 2], atol=1e-9)
