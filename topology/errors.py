"""
Errors raised by the mesh topology core. None of them is recoverable: each one
aborts the current operation and reaches the caller unchanged.
"""


class MeshTopologyError(ValueError):
    """Base class for topology and welding failures."""


class InvariantViolation(MeshTopologyError):
    """The face adjacency map is malformed, e.g. an edge with no owning face."""


class NonManifoldEdge(MeshTopologyError):
    """An edge is shared by more than two faces."""

    def __init__(self, edge, faces):
        self.edge = edge
        self.faces = list(faces)
        super().__init__(
            f"Edge ({edge.start}, {edge.end}) is shared by {len(self.faces)} faces {self.faces}, "
            "a face can have only one neighbour per edge"
        )


class LengthMismatch(MeshTopologyError):
    """Two sequences that must be index-aligned have different lengths."""

    def __init__(self, expected: int, actual: int, what: str = "inputs"):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Length mismatch between {what}: expected {expected}, got {actual}")


class IndexOutOfRange(MeshTopologyError, IndexError):
    """An index refers past the end of the vertex list."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Index {index} out of range for {size} vertices")
