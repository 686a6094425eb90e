import numpy as np
import pytest

from pydgfem.core import HexMesh
from pydgfem.utils.meshgen import structured_hex, unit_cube


def test_single_cube_faces(cube):
    assert cube.n_elements == 1 and cube.n_faces == 6
    assert len(cube.boundary_faces()) == 6
    normals = [cube.face(g).normal for g in cube.elements_list[0].faces]
    expected = [[-1, 0, 0], [1, 0, 0], [0, -1, 0], [0, 1, 0], [0, 0, -1], [0, 0, 1]]
    assert np.allclose(normals, expected)
    assert np.allclose([f.area for f in cube.faces_list], 4.0)
    assert np.allclose(cube.elements_list[0].centroid, 0.0)


def test_structured_face_counts():
    mesh = structured_hex(2.0, 2.0, 2.0, nx=2, ny=2, nz=2)
    assert mesh.n_vertices == 27
    assert mesh.n_faces == 36
    assert len(mesh.boundary_faces()) == 24
    assert sorted(mesh.neighbors()[0]) == [1, 2, 4]
    assert all(len(n) == 3 for n in mesh.neighbors())


def test_normals_point_out_of_owner(distorted_mesh):
    mesh = distorted_mesh
    for f in mesh.faces_list:
        c = mesh.vertices[list(f.vertices)].mean(axis=0)
        assert np.isclose(np.linalg.norm(f.normal), 1.0)
        assert np.dot(f.normal, c - mesh.elements_list[f.owner].centroid) > 0.0
        if not f.is_boundary:
            assert np.dot(f.normal, c - mesh.elements_list[f.neighbor].centroid) < 0.0
            assert mesh.elements_list[f.neighbor].contains_face(f.gid)


def test_node_coordinates_on_reference_cube(cube, ctx2):
    X = cube.node_coordinates(ctx2)
    assert X.shape == (1, 8, 3)
    assert np.allclose(X[0], ctx2.reference.points())


def test_offset_and_bad_counts():
    mesh = structured_hex(1.0, 1.0, 1.0, nx=1, ny=1, nz=1, offset=(5.0, 0.0, 0.0))
    assert np.isclose(mesh.vertices[:, 0].min(), 5.0)
    with pytest.raises(ValueError):
        structured_hex(1.0, 1.0, 1.0, nx=0, ny=1, nz=1)


def test_invalid_connectivity():
    cube = unit_cube()
    with pytest.raises(ValueError):
        HexMesh(cube.vertices, cube.cells[:, :7])
    with pytest.raises(ValueError):
        HexMesh(cube.vertices, cube.cells + 1)
    with pytest.raises(ValueError):
        HexMesh(cube.vertices, np.repeat(cube.cells, 3, axis=0))
