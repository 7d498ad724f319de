import numpy as np

from data_types import Mesh3d
from graphs import graph_from_face_neighbours_with_max_angle
from topology import face_neighbour_angles, face_neighbours_from_mesh


def segment_mesh_face_angles(mesh: Mesh3d, angle_threshold=15) -> list[list[int]]:
    """
    Segments a mesh into regions of faces whose normals differ by at most `angle_threshold`
    degrees across shared edges. Regions are returned in discovery order.
    """
    face_neighbours = face_neighbours_from_mesh(mesh)
    angles = face_neighbour_angles(face_neighbours, mesh)
    dual_graph = graph_from_face_neighbours_with_max_angle(face_neighbours, angles, np.radians(angle_threshold))
    return dual_graph.split_disconnected_components()
