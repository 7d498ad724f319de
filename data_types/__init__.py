from .edges import DirectedEdge, FaceEdgeTriple
from .face_neighbours import FaceNeighbours, FaceNeighboursAngle
from .mesh3d import Mesh3d
