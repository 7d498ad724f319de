from dataclasses import dataclass, astuple
from typing import Optional


@dataclass
class FaceNeighbours:
    """Neighbouring face index across each edge slot of one face, or None on a mesh boundary."""
    first: Optional[int] = None
    second: Optional[int] = None
    third: Optional[int] = None

    def __getitem__(self, slot: int) -> Optional[int]:
        return astuple(self)[slot]

    def __setitem__(self, slot: int, face_index: Optional[int]):
        setattr(self, ("first", "second", "third")[slot], face_index)

    def __iter__(self):
        return iter(astuple(self))

    def which_slot(self, face_index: int) -> Optional[int]:
        for slot, neighbour in enumerate(self):
            if neighbour == face_index:
                return slot
        return None

    def has_all_neighbours(self) -> bool:
        return all(neighbour is not None for neighbour in self)


@dataclass
class FaceNeighboursAngle:
    """Angle in radians between a face's normal and its neighbour's normal, per edge slot."""
    first: Optional[float] = None
    second: Optional[float] = None
    third: Optional[float] = None

    def __getitem__(self, slot: int) -> Optional[float]:
        return astuple(self)[slot]

    def __setitem__(self, slot: int, angle: Optional[float]):
        setattr(self, ("first", "second", "third")[slot], angle)

    def __iter__(self):
        return iter(astuple(self))
