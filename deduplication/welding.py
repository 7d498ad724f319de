"""
Vertex welding: merge vertices that coincide within a tolerance and renumber the faces.
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence

import numpy as np
from numpy.typing import NDArray

from data_types import Mesh3d
from topology.errors import IndexOutOfRange, LengthMismatch
from .duplicate_scan import scan_for_duplicates

logger = logging.getLogger(__name__)

DuplicateScanner = Callable[[NDArray[np.float64], float], Sequence[tuple[int, bool]]]


def compact_index_space(removed: Sequence[bool]) -> NDArray[np.int64]:
    """
    Return, for every slot, how many removed slots come strictly before it.

    Subtracting this offset from an index of a kept slot gives its index once all
    removed slots are gone.
    """
    removed = np.asarray(removed, dtype=bool)
    return np.cumsum(removed, dtype=np.int64) - removed


def replace_indices(mesh: Mesh3d, instructions: Mapping[int, int]) -> Mesh3d:
    """Return a copy of the mesh with every face index found in `instructions` substituted."""
    new_indices = np.array([instructions.get(int(index), int(index)) for index in mesh.indices], dtype=np.int64)
    return Mesh3d(mesh.coordinates.copy(), new_indices)


def remove_vertices_by_index_set(mesh: Mesh3d, indices: Iterable[int]) -> Mesh3d:
    """
    Return a copy of the mesh without the coordinates of the given vertices.

    Face indices are left untouched, so they must already have been remapped
    to the compacted numbering.

    Raises
    ------
    IndexOutOfRange
        If any index is outside the vertex list. Nothing is removed in that case.
    """
    to_remove = sorted(set(int(index) for index in indices), reverse=True)
    if to_remove:
        if to_remove[0] >= mesh.number_of_vertices:
            raise IndexOutOfRange(to_remove[0], mesh.number_of_vertices)
        if to_remove[-1] < 0:
            raise IndexOutOfRange(to_remove[-1], mesh.number_of_vertices)

    vertices = np.delete(mesh.vertices, np.array(to_remove, dtype=np.int64), axis=0)
    return Mesh3d(vertices.reshape(-1), mesh.indices.copy())


def weld(mesh: Mesh3d, tolerance: float, scanner: DuplicateScanner = scan_for_duplicates) -> Mesh3d:
    """
    Merge vertices closer than `tolerance` and renumber the faces accordingly.

    Parameters
    ----------
    mesh : Mesh3d
        The mesh to weld. It is not modified.
    tolerance : float
        Per-axis distance under which two vertices are the same vertex.
    scanner : callable, optional
        Function (points, tolerance) -> [(canonical_index, is_duplicate), ...],
        index-aligned with the points. Defaults to `scan_for_duplicates`.

    Returns
    -------
    Mesh3d
        A new mesh in which the first occurrence of every group of coinciding
        vertices survives, surviving vertices keep their relative order, and
        every face refers to the surviving vertex of its corners.
    """
    points = mesh.to_points()
    scan = list(scanner(points, tolerance))
    if len(scan) != len(points):
        raise LengthMismatch(len(points), len(scan), what="points and duplicate scan")

    canonical = np.array([index for index, _ in scan], dtype=np.int64)
    is_duplicate = np.array([duplicate for _, duplicate in scan], dtype=bool)

    if not is_duplicate.any():
        logger.debug("No duplicate vertices within tolerance %g", tolerance)
        return mesh.copy()

    # Offsets are taken over the original numbering, before any vertex is removed
    offsets = compact_index_space(is_duplicate)
    remap = {}
    for i in range(len(points)):
        if is_duplicate[i]:
            remap[i] = int(canonical[i] - offsets[canonical[i]])
        else:
            remap[i] = int(i - offsets[i])

    welded = replace_indices(mesh, remap)
    welded = remove_vertices_by_index_set(welded, np.flatnonzero(is_duplicate))

    logger.debug("Welded %d vertices into %d", mesh.number_of_vertices, welded.number_of_vertices)
    return welded
