# -- Wave Simulation Facade -- #

'''
Host-facing height-field wave simulation.

Wires GridState, FiniteDifferenceIntegrator, DisturbanceInjector,
NormalEstimator and FrameStepper together behind the small surface a
renderer needs each frame:

    sim = WaveSimulation(WaveConfig.standard())
    sim.disturb(100, 75, 0.4)
    sim.update(frameDeltaSeconds)
    for i in range(sim.vertexCount()):
        pos, nrm = sim.position(i), sim.normal(i)

Normals are recomputed after every update and disturbance, so reads
between calls always match the current heights.
'''

from __future__ import annotations

import numpy as np

from heightFieldWaves.solver.protocols import WaveConfig, WaveState
from heightFieldWaves.solver.gridState import GridState
from heightFieldWaves.solver.integrator import FiniteDifferenceIntegrator
from heightFieldWaves.solver.disturbance import DisturbanceInjector
from heightFieldWaves.solver.normals import NormalEstimator
from heightFieldWaves.solver.frameStepper import FrameStepper
from heightFieldWaves.solver.meshTopology import buildTriangleIndices, textureCoordinates


class WaveSimulation:
    '''
    Dynamic height-field water surface.

    Parameters:
    -----------
    config : WaveConfig
        Grid and time-stepping configuration

    Raises:
    -------
    InvalidConfigError : If the configuration is out of range
    '''

    def __init__(self, config: WaveConfig) -> None:
        self._grid = GridState(config)
        self._integrator = FiniteDifferenceIntegrator(self._grid)
        self._injector = DisturbanceInjector(self._grid)
        self._normalEstimator = NormalEstimator(self._grid)
        self._stepper = FrameStepper(self._integrator, self._grid.timeStep)

        self._lastSubSteps: int = 0
        self._refreshNormals()

    ######################################################################
    # -- Counts & Extents -- #
    ######################################################################

    def vertexCount(self) -> int:
        return self._grid.vertexCount

    def rowCount(self) -> int:
        return self._grid.rows

    def columnCount(self) -> int:
        return self._grid.columns

    def width(self) -> float:
        return self._grid.width

    def depth(self) -> float:
        return self._grid.depth

    def triangleCount(self) -> int:
        return self._grid.triangleCount

    ######################################################################
    # -- Per-Vertex Output -- #
    ######################################################################

    def position(self, index: int) -> np.ndarray:
        '''World position (x, h, z) of vertex index.'''
        return self._grid.position(index)

    def normal(self, index: int) -> np.ndarray:
        '''Unit normal of vertex index.'''
        self._grid.rowColumn(index)
        return self._normals[index].copy()

    def positions(self) -> np.ndarray:
        '''All positions, shape (m*n, 3).'''
        return self._grid.positions()

    def normals(self) -> np.ndarray:
        '''All unit normals, shape (m*n, 3).'''
        return self._normals.copy()

    def tangents(self) -> np.ndarray:
        '''All unit x-tangents, shape (m*n, 3).'''
        return self._tangents.copy()

    def textureCoordinates(self) -> np.ndarray:
        '''Per-vertex UVs, shape (m*n, 2).'''
        return textureCoordinates(self._grid.positions(), self._grid.width, self._grid.depth)

    def triangleIndices(self) -> np.ndarray:
        '''Index buffer over the full grid, shape (triangleCount, 3).'''
        return buildTriangleIndices(self._grid.rows, self._grid.columns)

    @property
    def heights(self) -> np.ndarray:
        '''Read-only view of the current heights, shape (m, n).'''
        return self._grid.heights

    @property
    def grid(self) -> GridState:
        return self._grid

    @property
    def config(self) -> WaveConfig:
        return self._grid.config

    @property
    def time(self) -> float:
        '''Simulated time [s].'''
        return self._stepper.simulatedTime

    ######################################################################
    # -- Mutation -- #
    ######################################################################

    def disturb(self, row: int, col: int, magnitude: float) -> None:
        '''
        Add an impulse at interior cell (row, col).

        Raises:
        -------
        OutOfRangeError : If the cell is outside the interior
        '''
        self._injector.disturb(row, col, magnitude)
        self._refreshNormals()

    def update(self, elapsedSeconds: float) -> WaveState:
        '''
        Advance by the elapsed host time, then recompute all normals.

        Parameters:
        -----------
        elapsedSeconds : float
            Real time since the previous frame [s]

        Returns:
        --------
        WaveState : Snapshot after the update
        '''
        self._lastSubSteps = self._stepper.advance(elapsedSeconds)
        self._refreshNormals()
        return self.currentState

    def reset(self) -> None:
        '''Return the surface to rest at time zero.'''
        self._grid.reset()
        self._stepper.reset()
        self._lastSubSteps = 0
        self._refreshNormals()

    @property
    def currentState(self) -> WaveState:
        '''Diagnostics snapshot of the current surface.'''
        return WaveState(
            time=self._stepper.simulatedTime,
            step=self._stepper.stepCount,
            subSteps=self._lastSubSteps,
            energy=self._grid.energy(),
            maxHeight=self._grid.maxAbsHeight(),
        )

    def _refreshNormals(self) -> None:
        self._normals = self._normalEstimator.computeNormals()
        self._tangents = self._normalEstimator.computeTangents()
