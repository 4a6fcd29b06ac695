# -- Surface Normal Estimation -- #

'''
Per-vertex normals and tangents from the local height gradient.

Central differences over the four axis neighbours give the slope:

    dh/dx = (h[r, c+1] - h[r, c-1]) / (2 dx)
    dh/dz = (h[r-1, c] - h[r+1, c]) / (2 dx)     (z decreases with row)

    normal   = normalize(-dh/dx, 1, -dh/dz)
    tangentX = normalize(1, dh/dx, 0)

Neighbours missing at the grid edge are replaced by the vertex's own
height (edge clamping). Nothing is cached: call again after every step
or disturbance.
'''

from __future__ import annotations

import numpy as np

from heightFieldWaves.solver.errors import OutOfRangeError
from heightFieldWaves.solver.gridState import GridState, isIndex


class NormalEstimator:
    '''
    Derives surface normals and x-tangents from a GridState.

    Parameters:
    -----------
    grid : GridState
        Height-field state to read
    '''

    def __init__(self, grid: GridState) -> None:
        self._grid = grid

    def _slopes(self) -> tuple[np.ndarray, np.ndarray]:
        '''Height gradients (dh/dx, dh/dz) for every vertex, shape (m, n) each.'''
        h = self._grid.current
        padded = np.pad(h, 1, mode='edge')
        twoDx = 2.0 * self._grid.spacing

        left = padded[1:-1, :-2]
        right = padded[1:-1, 2:]
        top = padded[:-2, 1:-1]
        bottom = padded[2:, 1:-1]

        dhdx = (right - left) / twoDx
        dhdz = (top - bottom) / twoDx
        return dhdx, dhdz

    def normalAt(self, row: int, col: int) -> np.ndarray:
        '''
        Unit normal at grid cell (row, col).

        Parameters:
        -----------
        row : int
            Grid row in [0, m)
        col : int
            Grid column in [0, n)

        Returns:
        --------
        np.ndarray : Unit normal, shape (3,)

        Raises:
        -------
        OutOfRangeError : If (row, col) is outside the grid
        '''
        m = self._grid.rows
        n = self._grid.columns
        if not (isIndex(row) and isIndex(col) and 0 <= row < m and 0 <= col < n):
            raise OutOfRangeError(f'cell ({row}, {col}) outside {m} x {n} grid')

        h = self._grid.current
        left = h[row, max(col - 1, 0)]
        right = h[row, min(col + 1, n - 1)]
        top = h[max(row - 1, 0), col]
        bottom = h[min(row + 1, m - 1), col]

        twoDx = 2.0 * self._grid.spacing
        normal = np.array([
            -(right - left) / twoDx,
            1.0,
            -(top - bottom) / twoDx,
        ])
        return normal / np.linalg.norm(normal)

    def computeNormals(self) -> np.ndarray:
        '''
        Unit normals for every vertex in index order.

        Returns:
        --------
        np.ndarray : Normals, shape (m*n, 3)
        '''
        dhdx, dhdz = self._slopes()
        normals = np.stack([-dhdx, np.ones_like(dhdx), -dhdz], axis=-1).reshape(-1, 3)
        normals /= np.linalg.norm(normals, axis=1, keepdims=True)
        return normals

    def computeTangents(self) -> np.ndarray:
        '''
        Unit tangents along +x for every vertex in index order.

        Returns:
        --------
        np.ndarray : Tangents, shape (m*n, 3)
        '''
        dhdx, _ = self._slopes()
        tangents = np.stack(
            [np.ones_like(dhdx), dhdx, np.zeros_like(dhdx)], axis=-1,
        ).reshape(-1, 3)
        tangents /= np.linalg.norm(tangents, axis=1, keepdims=True)
        return tangents
