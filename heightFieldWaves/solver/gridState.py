# -- Height-Field Grid State -- #

'''
Owns the height field, its two-step history and the grid geometry.

The three height buffers (previous, current, next) live in one fixed
(3, m, n) array. After each integration step the buffer roles rotate
through an index triple; the storage itself is never reallocated, so
views handed out to a renderer stay valid for the life of the grid.

Vertex i sits at row r = i // n, column c = i % n. The lattice is
centred on the origin with rows running towards -z:

    x = -(n - 1) * dx / 2 + c * dx
    z =  (m - 1) * dx / 2 - r * dx
'''

from __future__ import annotations

from dataclasses import replace

import numpy as np

from heightFieldWaves.solver.errors import OutOfRangeError
from heightFieldWaves.solver.protocols import WaveConfig


def isIndex(value) -> bool:
    '''Whether value is a plain or numpy integer (bools excluded).'''
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class GridState:
    '''
    Height-field state for the damped 2D wave equation.

    Read-only accessors cover geometry, counts and per-vertex positions.
    The writable buffer views (previous, current, next) and rotate() are
    meant for the integrator and disturbance injector only.

    Parameters:
    -----------
    config : WaveConfig
        Grid and time-stepping configuration. Validated on construction.

    Raises:
    -------
    InvalidConfigError : If the configuration is out of range
    '''

    def __init__(self, config: WaveConfig) -> None:
        config.validate()

        # Private copy: later edits to the caller's config must not leak in
        self._config = replace(config)
        self._rows = int(config.rows)
        self._columns = int(config.columns)

        self._buffers = np.zeros((3, self._rows, self._columns), dtype=np.float64)

        # Buffer roles: (previous, current, next)
        self._roles = (0, 1, 2)

        # Fixed lattice coordinates, shape (m, n)
        dx = config.spacing
        halfWidth = 0.5 * (self._columns - 1) * dx
        halfDepth = 0.5 * (self._rows - 1) * dx
        xCoords = -halfWidth + np.arange(self._columns) * dx
        zCoords = halfDepth - np.arange(self._rows) * dx
        self._latticeX, self._latticeZ = np.meshgrid(xCoords, zCoords, indexing='xy')
        self._latticeX.flags.writeable = False
        self._latticeZ.flags.writeable = False

    ######################################################################
    # -- Geometry & Constants -- #
    ######################################################################

    @property
    def config(self) -> WaveConfig:
        '''Copy of the configuration the grid was built from.'''
        return replace(self._config)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def spacing(self) -> float:
        return self._config.spacing

    @property
    def timeStep(self) -> float:
        return self._config.timeStep

    @property
    def waveSpeed(self) -> float:
        return self._config.waveSpeed

    @property
    def damping(self) -> float:
        return self._config.damping

    @property
    def vertexCount(self) -> int:
        '''Total number of vertices m * n.'''
        return self._rows * self._columns

    @property
    def triangleCount(self) -> int:
        '''Two triangles per quad over the full grid: 2 * (m-1) * (n-1).'''
        return 2 * (self._rows - 1) * (self._columns - 1)

    @property
    def width(self) -> float:
        return self._columns * self._config.spacing

    @property
    def depth(self) -> float:
        return self._rows * self._config.spacing

    @property
    def latticeX(self) -> np.ndarray:
        '''Fixed x coordinate of every vertex, shape (m, n), read-only.'''
        return self._latticeX

    @property
    def latticeZ(self) -> np.ndarray:
        '''Fixed z coordinate of every vertex, shape (m, n), read-only.'''
        return self._latticeZ

    ######################################################################
    # -- Height Buffers -- #
    ######################################################################

    @property
    def heights(self) -> np.ndarray:
        '''Read-only view of the current heights, shape (m, n).'''
        view = self._buffers[self._roles[1]].view()
        view.flags.writeable = False
        return view

    @property
    def previous(self) -> np.ndarray:
        '''Writable heights one step behind current.'''
        return self._buffers[self._roles[0]]

    @property
    def current(self) -> np.ndarray:
        '''Writable current heights.'''
        return self._buffers[self._roles[1]]

    @property
    def next(self) -> np.ndarray:
        '''Writable scratch buffer the integrator fills each step.'''
        return self._buffers[self._roles[2]]

    def rotate(self) -> None:
        '''
        Rotate buffer roles after a step: previous <- current, current <- next.

        The old previous buffer becomes the next scratch buffer.
        '''
        prevIdx, currIdx, nextIdx = self._roles
        self._roles = (currIdx, nextIdx, prevIdx)

    def reset(self) -> None:
        '''Zero all three buffers, returning the surface to rest.'''
        self._buffers[:] = 0.0

    ######################################################################
    # -- Vertex Accessors -- #
    ######################################################################

    def rowColumn(self, index: int) -> tuple[int, int]:
        '''
        Row and column of a flat vertex index.

        Raises:
        -------
        OutOfRangeError : If index is not an integer in [0, vertexCount)
        '''
        if not isIndex(index):
            raise OutOfRangeError(f'vertex index must be an integer, got {index!r}')
        if not 0 <= index < self.vertexCount:
            raise OutOfRangeError(
                f'vertex index {index} outside [0, {self.vertexCount})'
            )
        return divmod(int(index), self._columns)

    def position(self, index: int) -> np.ndarray:
        '''
        World position (x, h, z) of vertex index.

        Parameters:
        -----------
        index : int
            Flat vertex index in [0, vertexCount)

        Returns:
        --------
        np.ndarray : Position, shape (3,)
        '''
        r, c = self.rowColumn(index)
        return np.array([
            self._latticeX[r, c],
            self.current[r, c],
            self._latticeZ[r, c],
        ])

    def positions(self) -> np.ndarray:
        '''All vertex positions in index order, shape (m*n, 3).'''
        return np.column_stack([
            self._latticeX.ravel(),
            self.current.ravel(),
            self._latticeZ.ravel(),
        ])

    ######################################################################
    # -- Diagnostics -- #
    ######################################################################

    def energy(self) -> float:
        '''
        Discrete wave energy of the (previous, current) pair.

        E = 1/2 * dx^2 * [ sum(((u1 - u0) / dt)^2)
                           + (c / dx)^2 * sum_edges (D u1)(D u0) ]

        where D is the height difference across each axis-aligned edge.
        With fixed boundaries the explicit scheme conserves E exactly when
        undamped and never increases it when damped. The plain sum of
        squared heights is not conserved: energy moves between the
        kinetic and potential terms as the waves travel.

        Returns:
        --------
        float : Discrete energy
        '''
        u0 = self.previous
        u1 = self.current
        dt = self._config.timeStep
        dx = self._config.spacing
        c = self._config.waveSpeed

        velocity = (u1 - u0) / dt
        kinetic = np.sum(velocity * velocity)

        potential = (
            np.sum(np.diff(u1, axis=1) * np.diff(u0, axis=1))
            + np.sum(np.diff(u1, axis=0) * np.diff(u0, axis=0))
        ) * (c / dx) ** 2

        return float(0.5 * dx * dx * (kinetic + potential))

    def maxAbsHeight(self) -> float:
        '''Largest absolute current height.'''
        return float(np.max(np.abs(self.current)))
