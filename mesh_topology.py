import argparse
import logging
import os
import sys
import trimesh

from data_types import Mesh3d
from deduplication import weld
from segmenting import segment_mesh_face_angles
from topology import MeshTopologyError
from topology.mesh_analysis import get_boundary_loops, get_non_manifold_edges, is_mesh_connected


DEFAULT_WELD_TOLERANCE = 0.001
DEFAULT_ANGLE_THRESHOLD = 15  # degrees

logger = logging.getLogger("mesh_topology")


def load_mesh_file_cli():
    """Parse command-line arguments and load a mesh file."""
    parser = argparse.ArgumentParser(description='Weld a triangle mesh and report its topology.')
    parser.add_argument('load_filepath', type=str, help='Path to the mesh file to load (any format trimesh reads)')
    parser.add_argument('--tolerance', '-t', type=float, default=DEFAULT_WELD_TOLERANCE,
                        help=f'Per-axis distance under which vertices are welded (default {DEFAULT_WELD_TOLERANCE})')
    parser.add_argument('--angle-threshold', '-a', type=float, default=DEFAULT_ANGLE_THRESHOLD,
                        help=f'Largest angle in degrees between faces of one region (default {DEFAULT_ANGLE_THRESHOLD})')
    parser.add_argument('--weld-output', '-o', type=str, default=None, help='Path to export the welded mesh to')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    if not os.path.isfile(args.load_filepath):
        print(f"Error: The file {args.load_filepath} does not exist.")
        sys.exit(1)

    if args.tolerance < 0:
        print(f"Error: The tolerance must be non-negative. Got: {args.tolerance}")
        sys.exit(1)

    try:
        loaded = trimesh.load(args.load_filepath, force='mesh', process=False)
        return Mesh3d.from_trimesh(loaded), args

    except Exception as e:
        print(f"Error loading the mesh file: {e}")
        sys.exit(1)


def report_topology(mesh: Mesh3d, tolerance: float, angle_threshold: float) -> Mesh3d:
    """Weld the mesh, log its topology and return the welded mesh."""
    welded = weld(mesh, tolerance)
    logger.info("Vertices: %d -> %d after welding (tolerance %g)",
                mesh.number_of_vertices, welded.number_of_vertices, tolerance)
    logger.info("Faces: %d", welded.number_of_faces)

    num_loops = len(get_boundary_loops(welded))
    logger.info("Boundary loops: %d", num_loops)

    non_manifold = get_non_manifold_edges(welded)
    logger.info("Edges not shared by exactly two faces: %d", len(non_manifold))
    logger.info("Connected: %s", is_mesh_connected(welded))

    regions = segment_mesh_face_angles(welded, angle_threshold=angle_threshold)
    logger.info("Face regions within %g degrees: %d", angle_threshold, len(regions))
    return welded


def main():
    mesh, args = load_mesh_file_cli()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        welded = report_topology(mesh, args.tolerance, args.angle_threshold)
    except MeshTopologyError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.weld_output:
        welded.to_trimesh().export(args.weld_output)
        logger.info("Welded mesh written to %s", args.weld_output)


if __name__ == "__main__":
    main()
