"""pydgfem.io.visualization"""
import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Line3DCollection

from pydgfem.fem.basis import cardinal_basis

# corner pairs forming the 12 edges of a VTK hexahedron
_HEX_EDGES = ((0, 1), (1, 2), (2, 3), (3, 0),
              (4, 5), (5, 6), (6, 7), (7, 4),
              (0, 4), (1, 5), (2, 6), (3, 7))


def plot_basis_1d(basis, *, derivative=False, ax=None, show=False, resolution=200):
    """
    Plots the cardinal functions of a Basis1D on [-1, 1] and marks the nodes.

    With ``derivative=True`` the tabulated derivatives at the nodes are drawn
    as markers on top of finite-difference curves of each function.

    Returns:
        matplotlib.axes.Axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))
    x = np.linspace(-1.0, 1.0, resolution)
    for i in range(basis.n):
        y = cardinal_basis(i, basis.nodes, x)
        if derivative:
            line, = ax.plot(x, np.gradient(y, x), label=fr"$\psi'_{i}$")
            ax.plot(basis.nodes, basis.dpsi[i], "o", color=line.get_color())
        else:
            line, = ax.plot(x, y, label=fr"$\psi_{i}$")
            ax.plot(basis.nodes, basis.psi[i], "o", color=line.get_color())
    ax.axhline(0.0, color="gray", linewidth=0.5)
    ax.set_xlabel(r"$\xi$")
    ax.set_title(f"{basis.kind} basis, N={basis.n}")
    ax.legend(loc="best", fontsize="small")
    if show:
        plt.show()
    return ax


def plot_element_nodes(mesh, ctx, *, element_ids=None, ax=None, show=False, annotate=False):
    """
    Scatter plot of the DG nodes of selected hexahedra with their edges.

    Returns:
        mpl_toolkits.mplot3d.Axes3D
    """
    if ax is None:
        fig = plt.figure(figsize=(8, 8))
        ax = fig.add_subplot(projection="3d")
    eids = range(mesh.n_elements) if element_ids is None else element_ids
    coords = mesh.node_coordinates(ctx)
    corners = mesh.corner_coordinates()

    segs = [corners[e][list(pair)] for e in eids for pair in _HEX_EDGES]
    ax.add_collection3d(Line3DCollection(segs, colors="black", linewidths=0.8))
    for e in eids:
        X = coords[e]
        ax.scatter(X[:, 0], X[:, 1], X[:, 2], s=12)
        if annotate:
            for n, (px, py, pz) in enumerate(X):
                ax.text(px, py, pz, str(n), fontsize=7)
    lo, hi = mesh.vertices.min(axis=0), mesh.vertices.max(axis=0)
    ax.set_xlim(lo[0], hi[0]); ax.set_ylim(lo[1], hi[1]); ax.set_zlim(lo[2], hi[2])
    ax.set_xlabel("x"); ax.set_ylabel("y"); ax.set_zlabel("z")
    if show:
        plt.show()
    return ax
