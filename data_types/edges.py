"""
Directed edges and per-face edge triples.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, order=True)
class DirectedEdge:
    """An ordered pair of vertex indices. Ordering is lexicographic on (start, end)."""
    start: int
    end: int

    def reversed(self) -> "DirectedEdge":
        return DirectedEdge(self.end, self.start)

    def equals_undirected(self, other: "DirectedEdge") -> bool:
        """True if both edges connect the same two vertices, in either direction."""
        if self.start == other.start and self.end == other.end:
            return True
        return self.start == other.end and self.end == other.start

    @staticmethod
    def flatten(edges: Iterable["DirectedEdge"]) -> list[int]:
        flat = []
        for edge in edges:
            flat.append(edge.start)
            flat.append(edge.end)
        return flat

    @staticmethod
    def unique_undirected(edges: Iterable["DirectedEdge"]) -> list["DirectedEdge"]:
        """
        Return every input edge together with its reverse, each direction exactly once.
        Edges keep the order in which they (or their reverse) were first seen.
        """
        seen = set()
        unique = []
        for edge in edges:
            for candidate in (edge, edge.reversed()):
                if candidate not in seen:
                    seen.add(candidate)
                    unique.append(candidate)
        return unique


@dataclass(frozen=True)
class FaceEdgeTriple:
    """The three boundary edges of one triangular face in winding order: v0->v1, v1->v2, v2->v0."""
    first: DirectedEdge
    second: DirectedEdge
    third: DirectedEdge

    @classmethod
    def from_face(cls, a: int, b: int, c: int) -> "FaceEdgeTriple":
        return cls(DirectedEdge(a, b), DirectedEdge(b, c), DirectedEdge(c, a))

    def __iter__(self):
        return iter((self.first, self.second, self.third))

    def __getitem__(self, slot: int) -> DirectedEdge:
        return (self.first, self.second, self.third)[slot]

    def slot_of(self, edge: DirectedEdge) -> Optional[int]:
        """Return the first slot (0, 1 or 2) holding an edge undirected-equal to `edge`."""
        for slot, own_edge in enumerate(self):
            if own_edge.equals_undirected(edge):
                return slot
        return None

    def which_edge_is_neighbour_to(self, other: "FaceEdgeTriple") -> Optional[int]:
        """Return the slot of the first own edge shared (in any direction) with `other`, if any."""
        for slot, own_edge in enumerate(self):
            if any(own_edge.equals_undirected(other_edge) for other_edge in other):
                return slot
        return None

    @staticmethod
    def build_adjacency_map(triples: Iterable["FaceEdgeTriple"]) -> dict[DirectedEdge, list[int]]:
        """
        Map every edge of the given faces to the indices of the faces owning it.

        An edge and its reverse share one entry, keyed by whichever direction was
        seen first; owners are appended in face order.
        """
        adjacency = {}
        for face_index, triple in enumerate(triples):
            for edge in triple:
                reverse = edge.reversed()
                if reverse in adjacency:
                    adjacency[reverse].append(face_index)
                elif edge in adjacency:
                    adjacency[edge].append(face_index)
                else:
                    adjacency[edge] = [face_index]
        return adjacency
