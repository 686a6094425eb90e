import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from pydgfem.core.indexing import HEX_FACES
from pydgfem.core.topology import Element, Face
from pydgfem.integration.pre_tabulates import tabulate_hex8

logger = logging.getLogger(__name__)


class HexMesh:
    """
    In-memory unstructured mesh of (possibly distorted) hexahedra.

    Vertices follow the VTK hexahedron ordering. Faces shared by two
    elements are identified from their sorted corner tuples; each face is
    owned by the first element that lists it and its normal points out of
    that owner.
    """
    # Local corner indices of each face, ordered like HEX_FACES and wound so
    # that the right-hand normal points out of the element.
    _FACE_TABLE = (
        (0, 4, 7, 3),   # xi   = -1
        (1, 2, 6, 5),   # xi   = +1
        (0, 1, 5, 4),   # eta  = -1
        (3, 7, 6, 2),   # eta  = +1
        (0, 3, 2, 1),   # zeta = -1
        (4, 5, 6, 7),   # zeta = +1
    )

    def __init__(self, vertices: np.ndarray, cells: np.ndarray):
        self.vertices = np.asarray(vertices, dtype=float)
        self.cells = np.asarray(cells, dtype=np.int64)
        if self.vertices.ndim != 2 or self.vertices.shape[1] != 3:
            raise ValueError(f"vertices must have shape (n, 3), got {self.vertices.shape}")
        if self.cells.ndim != 2 or self.cells.shape[1] != 8:
            raise ValueError(f"cells must have shape (n, 8), got {self.cells.shape}")
        if self.cells.size and (self.cells.min() < 0 or self.cells.max() >= len(self.vertices)):
            raise ValueError("cells reference vertices out of range")
        self.elements_list: List[Element] = []
        self.faces_list: List[Face] = []
        self._face_dict: Dict[Tuple[int, ...], Face] = {}
        self._build_topology()
        logger.debug(f"HexMesh: {self.n_elements} elements, {self.n_faces} faces, "
                     f"{len(self.boundary_faces())} on the boundary")

    def _build_topology(self):
        corners = self.corner_coordinates()
        for eid, verts in enumerate(self.cells):
            self.elements_list.append(Element(
                id=eid,
                vertices=tuple(int(v) for v in verts),
                centroid=corners[eid].mean(axis=0),
            ))

        for eid, verts in enumerate(self.cells):
            elem = self.elements_list[eid]
            face_gids = []
            for lf, local in enumerate(self._FACE_TABLE):
                fverts = tuple(int(verts[c]) for c in local)
                key = tuple(sorted(fverts))
                face = self._face_dict.get(key)
                if face is None:
                    normal, area = self._face_normal(fverts)
                    face = Face(gid=len(self.faces_list), vertices=fverts, owner=eid,
                                neighbor=None, owner_face=lf, normal=normal, area=area)
                    self.faces_list.append(face)
                    self._face_dict[key] = face
                elif face.neighbor is None and face.owner != eid:
                    face.neighbor = eid
                    face.neighbor_face = lf
                else:
                    raise ValueError(f"Face {key} is shared by more than two elements")
                face_gids.append(face.gid)
            elem.faces = tuple(face_gids)

        for elem in self.elements_list:
            for lf, fgid in enumerate(elem.faces):
                face = self.faces_list[fgid]
                elem.neighbors[lf] = face.neighbor if face.owner == elem.id else face.owner

    def _face_normal(self, fverts) -> Tuple[np.ndarray, float]:
        """Unit normal and area of a (nearly planar) quadrilateral face."""
        p = self.vertices[list(fverts)]
        n = 0.5 * np.cross(p[2] - p[0], p[3] - p[1])
        area = float(np.linalg.norm(n))
        return (n / area if area > 1e-14 else np.zeros(3)), area

    # --- sizes and lookups ---
    @property
    def n_elements(self) -> int:
        return len(self.cells)

    @property
    def n_faces(self) -> int:
        return len(self.faces_list)

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    def face(self, gid: int) -> Face:
        return self.faces_list[gid]

    def boundary_faces(self) -> List[int]:
        return [f.gid for f in self.faces_list if f.is_boundary]

    def neighbors(self) -> List[List[int]]:
        return [[n for n in e.neighbors.values() if n is not None] for e in self.elements_list]

    # --- geometry ---
    def corner_coordinates(self, elem_id: Optional[int] = None) -> np.ndarray:
        """(n_elements, 8, 3) corner positions, or (8, 3) for one element."""
        if elem_id is None:
            return self.vertices[self.cells]
        return self.vertices[self.cells[elem_id]]

    def node_coordinates(self, ctx) -> np.ndarray:
        """Physical positions (n_elements, NP, 3) of every element's DG nodes.

        Nodes are placed with the trilinear corner map, so faces stay planar
        and element edges straight.
        """
        N, _ = tabulate_hex8(ctx.reference.points())
        return np.einsum("mv,evx->emx", N, self.corner_coordinates())

    def corner_jacobian(self, pts) -> np.ndarray:
        """Trilinear-map Jacobians (n_elements, M, 3, 3), J[a, b] = dx_a/dxi_b."""
        _, dN = tabulate_hex8(pts)
        return np.einsum("evx,mvb->emxb", self.corner_coordinates(), dN)
