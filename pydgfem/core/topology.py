import numpy as np
from dataclasses import dataclass, field
from typing import Tuple, Dict, Optional


@dataclass(slots=True)
class Face:
    gid: int
    vertices: Tuple[int, int, int, int]   # Corner vertices, counter-clockwise seen from the owner's outside
    owner: int                            # Element the normal points out of
    neighbor: Optional[int]               # None on the boundary
    owner_face: int                       # Local face index (HEX_FACES order) within the owner
    neighbor_face: Optional[int] = None
    normal: np.ndarray = None             # Unit normal, outward from the owner
    area: float = 0.0
    tag: str = ""

    @property
    def is_boundary(self) -> bool:
        return self.neighbor is None


@dataclass(slots=True)
class Element:
    id: int
    vertices: Tuple[int, ...]             # Global vertex indices (VTK hexahedron order)
    faces: Tuple[int, ...] = field(default_factory=tuple)
    neighbors: Dict[int, Optional[int]] = field(default_factory=dict)   # local face -> element
    centroid: np.ndarray = None
    tag: str = ""

    def contains_face(self, face_gid: int) -> bool:
        return face_gid in self.faces
