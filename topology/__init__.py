from .errors import IndexOutOfRange, InvariantViolation, LengthMismatch, MeshTopologyError, NonManifoldEdge
from .face_neighbours import face_neighbour_angles, face_neighbours_from_mesh, face_neighbours_from_triples
