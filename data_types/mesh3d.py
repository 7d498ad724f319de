from dataclasses import dataclass
import numpy as np
from numpy.typing import NDArray
import trimesh

from .edges import DirectedEdge, FaceEdgeTriple


@dataclass(eq=False)
class Mesh3d:
    coordinates: NDArray[np.float64]  # flat 3V array of x, y, z vertex coordinates
    indices: NDArray[np.int64]  # flat 3F array of vertex *indices*, three per face corner

    def __post_init__(self):
        self.coordinates = np.asarray(self.coordinates, dtype=np.float64).reshape(-1)
        self.indices = np.asarray(self.indices, dtype=np.int64).reshape(-1)
        if len(self.coordinates) % 3 != 0:
            raise ValueError(f"Coordinate buffer length must be a multiple of 3, got {len(self.coordinates)}")
        if len(self.indices) % 3 != 0:
            raise ValueError(f"Index buffer length must be a multiple of 3, got {len(self.indices)}")

    @classmethod
    def from_vertices_and_faces(cls, vertices, faces) -> "Mesh3d":
        """Build a mesh from a V x 3 vertex array and an F x 3 face array."""
        return cls(np.asarray(vertices, dtype=np.float64).reshape(-1),
                   np.asarray(faces, dtype=np.int64).reshape(-1))

    @classmethod
    def from_trimesh(cls, mesh: trimesh.Trimesh) -> "Mesh3d":
        return cls.from_vertices_and_faces(mesh.vertices, mesh.faces)

    def to_trimesh(self) -> trimesh.Trimesh:
        # process=False keeps vertex order and duplicates exactly as they are
        return trimesh.Trimesh(vertices=self.vertices, faces=self.faces, process=False, validate=False)

    @property
    def vertices(self) -> NDArray[np.float64]:
        return self.coordinates.reshape(-1, 3)

    @property
    def faces(self) -> NDArray[np.int64]:
        return self.indices.reshape(-1, 3)

    @property
    def number_of_vertices(self) -> int:
        return len(self.coordinates) // 3

    @property
    def number_of_faces(self) -> int:
        return len(self.indices) // 3

    def to_points(self) -> NDArray[np.float64]:
        return self.vertices.copy()

    def to_edges(self) -> list[DirectedEdge]:
        """Return the three directed edges of every face, in face winding order."""
        edges = []
        for triple in self.to_face_edge_triples():
            edges.extend(triple)
        return edges

    def to_face_edge_triples(self) -> list[FaceEdgeTriple]:
        return [FaceEdgeTriple.from_face(int(a), int(b), int(c)) for a, b, c in self.faces]

    def flipped(self) -> "Mesh3d":
        """Return a copy with the winding of every face reversed."""
        return Mesh3d(self.coordinates.copy(), self.faces[:, ::-1].reshape(-1))

    def copy(self) -> "Mesh3d":
        return Mesh3d(self.coordinates.copy(), self.indices.copy())

    def eq_with_tolerance(self, other: "Mesh3d", tolerance: float) -> bool:
        """
        Compare two meshes, allowing each coordinate to differ by at most `tolerance`.
        Indices must match exactly, including their order.
        """
        if len(self.coordinates) != len(other.coordinates):
            return False
        if not np.array_equal(self.indices, other.indices):
            return False
        return bool(np.all(np.abs(self.coordinates - other.coordinates) <= tolerance))

    def __eq__(self, other):
        if not isinstance(other, Mesh3d):
            return NotImplemented
        return np.array_equal(self.coordinates, other.coordinates) and np.array_equal(self.indices, other.indices)

    def __repr__(self):
        return f"Mesh3d(vertices={self.number_of_vertices}, faces={self.number_of_faces})"
