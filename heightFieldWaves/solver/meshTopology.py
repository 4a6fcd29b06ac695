# -- Grid Mesh Topology -- #

'''
Index buffer and texture mapping for a rows x columns vertex grid.

Each quad (i, j) .. (i+1, j+1) is split into two triangles:

    (i*n + j,     i*n + j + 1, (i+1)*n + j)
    ((i+1)*n + j, i*n + j + 1, (i+1)*n + j + 1)

giving 2 * (m-1) * (n-1) triangles over the full grid, boundary quads
included. Texture coordinates map the centred lattice [-w/2, w/2] onto
[0, 1].
'''

from __future__ import annotations

import numpy as np


def buildTriangleIndices(rows: int, columns: int) -> np.ndarray:
    '''
    Triangle vertex indices for a rows x columns grid.

    Parameters:
    -----------
    rows : int
        Number of grid rows m
    columns : int
        Number of grid columns n

    Returns:
    --------
    np.ndarray : Indices, shape (2*(m-1)*(n-1), 3), dtype int64
    '''
    i, j = np.meshgrid(np.arange(rows - 1), np.arange(columns - 1), indexing='ij')
    i = i.ravel()
    j = j.ravel()

    topLeft = i * columns + j
    topRight = topLeft + 1
    bottomLeft = (i + 1) * columns + j
    bottomRight = bottomLeft + 1

    first = np.column_stack([topLeft, topRight, bottomLeft])
    second = np.column_stack([bottomLeft, topRight, bottomRight])

    # Interleave so quad k owns triangles 2k and 2k+1
    triangles = np.empty((2 * len(i), 3), dtype=np.int64)
    triangles[0::2] = first
    triangles[1::2] = second
    return triangles


def textureCoordinates(positions: np.ndarray, width: float, depth: float) -> np.ndarray:
    '''
    Texture coordinates derived from vertex positions.

    u = 0.5 + x / width,  v = 0.5 - z / depth

    Parameters:
    -----------
    positions : np.ndarray
        Vertex positions (x, h, z), shape (N, 3)
    width : float
        Grid extent along x
    depth : float
        Grid extent along z

    Returns:
    --------
    np.ndarray : UV coordinates, shape (N, 2)
    '''
    u = 0.5 + positions[:, 0] / width
    v = 0.5 - positions[:, 2] / depth
    return np.column_stack([u, v])
