# -- Wave Simulation Protocols -- #

'''
Configuration and result dataclasses for the height-field wave solver.

Defines the core data structures (WaveConfig, WaveState) and the
integrator protocol that time-stepping schemes must satisfy.
'''

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from heightFieldWaves import constants as const
from heightFieldWaves.solver.errors import InvalidConfigError


######################################################################
# -- Wave Configuration -- #
######################################################################

@dataclass
class WaveConfig:
    '''
    Configuration for a height-field wave simulation.

    Defines the grid resolution, cell size and the constants of the
    damped 2D wave equation. The configuration is validated when a
    GridState is built from it, not when the dataclass is created.

    Parameters:
    -----------
    rows : int
        Number of grid rows m (>= 4)
    columns : int
        Number of grid columns n (>= 4)
    spacing : float
        Uniform cell size dx in both axes (> 0)
    timeStep : float
        Fixed simulation sub-step dt [s] (> 0)
    waveSpeed : float
        Wave propagation speed c [units/s] (> 0)
    damping : float
        Damping coefficient, in [0, 2)
    '''

    rows: int = 128
    columns: int = 128
    spacing: float = const.defaultSpacing
    timeStep: float = const.defaultTimeStep
    waveSpeed: float = const.defaultWaveSpeed
    damping: float = const.defaultDamping

    @property
    def width(self) -> float:
        '''Grid extent along x, n * dx.'''
        return self.columns * self.spacing

    @property
    def depth(self) -> float:
        '''Grid extent along z, m * dx.'''
        return self.rows * self.spacing

    @property
    def vertexCount(self) -> int:
        '''Total number of grid vertices m * n.'''
        return self.rows * self.columns

    @property
    def courantNumber(self) -> float:
        '''Courant number c * dt / dx.'''
        return self.waveSpeed * self.timeStep / self.spacing

    @property
    def isStable(self) -> bool:
        '''
        Whether the CFL-like bound c * dt / dx <= 1 / sqrt(2) holds.

        Advisory only. The solver never rejects an unstable
        configuration; violating the bound makes the heights diverge.
        '''
        return self.courantNumber <= const.stabilityBound

    def validate(self) -> None:
        '''
        Check every parameter against its allowed range.

        Raises:
        -------
        InvalidConfigError : If any parameter is out of range
        '''
        for name in ('rows', 'columns'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidConfigError(f'{name} must be an integer, got {value!r}')
            if value < const.minGridSize:
                raise InvalidConfigError(
                    f'{name} must be >= {const.minGridSize}, got {value}'
                )

        for name in ('spacing', 'timeStep', 'waveSpeed', 'damping'):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidConfigError(f'{name} must be finite, got {value!r}')

        if self.spacing <= 0.0:
            raise InvalidConfigError(f'spacing must be > 0, got {self.spacing}')
        if self.timeStep <= 0.0:
            raise InvalidConfigError(f'timeStep must be > 0, got {self.timeStep}')
        if self.waveSpeed <= 0.0:
            raise InvalidConfigError(f'waveSpeed must be > 0, got {self.waveSpeed}')
        if not 0.0 <= self.damping < const.maxDamping:
            raise InvalidConfigError(
                f'damping must be in [0, {const.maxDamping}), got {self.damping}'
            )

    @classmethod
    def small(cls) -> WaveConfig:
        '''
        Small pond for quick testing.

        64 x 64 vertices, runs thousands of steps per second.
        '''
        return cls(
            rows=64,
            columns=64,
            spacing=1.0,
            timeStep=0.03,
            waveSpeed=4.0,
            damping=0.2,
        )

    @classmethod
    def standard(cls) -> WaveConfig:
        '''
        The 305 x 150 demo lake.

        305 x 150 vertices, Courant number 0.12.
        '''
        return cls(
            rows=const.defaultRows,
            columns=const.defaultColumns,
            spacing=const.defaultSpacing,
            timeStep=const.defaultTimeStep,
            waveSpeed=const.defaultWaveSpeed,
            damping=const.defaultDamping,
        )

    @classmethod
    def fromDict(cls, data: dict) -> WaveConfig:
        '''
        Build a configuration from parsed JSON sections.

        Reads the 'grid' and 'simulation' sections; missing keys fall
        back to the dataclass defaults.

        Parameters:
        -----------
        data : dict
            Parsed configuration document

        Returns:
        --------
        WaveConfig : Loaded configuration
        '''
        gridSection = data.get('grid', {})
        simSection = data.get('simulation', {})
        defaults = cls()

        return cls(
            rows=gridSection.get('rows', defaults.rows),
            columns=gridSection.get('columns', defaults.columns),
            spacing=gridSection.get('spacing', defaults.spacing),
            timeStep=simSection.get('timeStep', defaults.timeStep),
            waveSpeed=simSection.get('waveSpeed', defaults.waveSpeed),
            damping=simSection.get('damping', defaults.damping),
        )

    @classmethod
    def fromJson(cls, configPath: str) -> WaveConfig:
        '''
        Load configuration from a JSON file.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file

        Returns:
        --------
        WaveConfig : Loaded configuration
        '''
        with open(configPath, 'r') as f:
            data = json.load(f)

        return cls.fromDict(data)

    def toDict(self) -> dict:
        '''Plain-dict form, used for export metadata.'''
        return {
            'rows': self.rows,
            'columns': self.columns,
            'spacing': self.spacing,
            'timeStep': self.timeStep,
            'waveSpeed': self.waveSpeed,
            'damping': self.damping,
        }


######################################################################
# -- Simulation State -- #
######################################################################

@dataclass
class WaveState:
    '''
    Snapshot of the simulation after an update.

    Parameters:
    -----------
    time : float
        Simulated time [s], always a whole multiple of dt
    step : int
        Number of integration sub-steps taken so far
    subSteps : int
        Sub-steps taken by the update that produced this snapshot
    energy : float
        Discrete wave energy (kinetic + potential)
    maxHeight : float
        Largest absolute height on the grid
    '''

    time: float
    step: int
    subSteps: int
    energy: float
    maxHeight: float


######################################################################
# -- Integrator Protocol -- #
######################################################################

class Integrator(Protocol):
    '''Protocol for fixed-step height-field integrators.'''

    def step(self) -> None:
        '''Advance the height field by exactly one fixed time step.'''
        ...
