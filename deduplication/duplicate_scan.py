import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree
from tqdm import tqdm


def points_eq_with_tolerance(point_a, point_b, tolerance: float) -> bool:
    """Whether no coordinate of the two points differs by more than `tolerance`."""
    return bool(np.all(np.abs(np.asarray(point_a) - np.asarray(point_b)) <= tolerance))


def scan_for_duplicates(points: NDArray[np.float64], tolerance: float, progress: bool = False) -> list[tuple[int, bool]]:
    """
    Find which points repeat an earlier point within a per-axis tolerance.

    Parameters
    ----------
    points : NDArray[np.float64]
        N x 3 array of point coordinates.
    tolerance : float
        Largest per-axis difference for two points to count as the same point.
    progress : bool, optional
        Show a progress bar while scanning.

    Returns
    -------
    list[tuple[int, bool]]
        For each point, the index of the point it duplicates and True, or its
        own index and False if it is a first occurrence.

    Notes
    -----
    Points are processed in input order. Every point that is not itself a
    duplicate claims all later points within tolerance, so a later claim
    overrides an earlier one.
    """
    if tolerance < 0:
        raise ValueError(f"Tolerance must be non-negative, got {tolerance}")

    points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    info = [(i, False) for i in range(len(points))]
    if len(points) == 0:
        return info

    # p=inf makes the ball query a per-axis (Chebyshev) comparison
    tree = cKDTree(points)
    for i in tqdm(range(len(points)), desc="Scanning for duplicates", disable=not progress):
        if info[i][1]:
            continue
        for j in tree.query_ball_point(points[i], tolerance, p=np.inf):
            if j > i:
                info[j] = (i, True)

    return info
