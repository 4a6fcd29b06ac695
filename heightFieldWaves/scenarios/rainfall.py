# -- Rainfall Scenario -- #

'''
Timer-gated random raindrops on the water surface.

Host-side scheduling policy: every `interval` seconds of accumulated
host time, one drop of random magnitude lands on a random cell at least
`edgeMargin` cells away from the grid edge. The scheduler only calls
WaveSimulation.disturb(); it holds its own clock and random generator,
so the solver core stays free of timers and global state.
'''

from __future__ import annotations

import json
from collections import deque
from dataclasses import dataclass
from typing import Optional

import numpy as np

from heightFieldWaves import constants as const
from heightFieldWaves.waves import WaveSimulation


######################################################################
# -- Rainfall Configuration -- #
######################################################################

@dataclass
class RainfallConfig:
    '''
    Configuration for random raindrops.

    Parameters:
    -----------
    interval : float
        Host seconds between drops (> 0)
    minMagnitude : float
        Smallest drop magnitude
    maxMagnitude : float
        Largest drop magnitude
    edgeMargin : int
        Minimum distance of a drop from the grid edge [cells], >= 1
    seed : int | None
        Seed for the random generator; None for a fresh seed
    '''

    interval: float = const.rainInterval
    minMagnitude: float = const.rainMinMagnitude
    maxMagnitude: float = const.rainMaxMagnitude
    edgeMargin: int = const.rainEdgeMargin
    seed: Optional[int] = None

    @classmethod
    def drizzle(cls) -> RainfallConfig:
        '''Sparse, light drops.'''
        return cls(interval=1.0, minMagnitude=0.05, maxMagnitude=0.15)

    @classmethod
    def storm(cls) -> RainfallConfig:
        '''Frequent, heavy drops.'''
        return cls(interval=0.05, minMagnitude=0.4, maxMagnitude=1.0)

    @classmethod
    def fromDict(cls, data: dict) -> RainfallConfig:
        '''Build from the 'rain' section of a parsed configuration file.'''
        rainSection = data.get('rain', {})
        defaults = cls()

        return cls(
            interval=rainSection.get('interval', defaults.interval),
            minMagnitude=rainSection.get('minMagnitude', defaults.minMagnitude),
            maxMagnitude=rainSection.get('maxMagnitude', defaults.maxMagnitude),
            edgeMargin=rainSection.get('edgeMargin', defaults.edgeMargin),
            seed=rainSection.get('seed', defaults.seed),
        )

    @classmethod
    def fromJson(cls, configPath: str) -> RainfallConfig:
        with open(configPath, 'r') as f:
            data = json.load(f)
        return cls.fromDict(data)


@dataclass
class Drop:
    '''A single raindrop that was applied to the surface.'''

    time: float
    row: int
    col: int
    magnitude: float


######################################################################
# -- Rainfall Scheduler -- #
######################################################################

class RainfallScheduler:
    '''
    Drives random disturbances on a WaveSimulation at a fixed cadence.

    Parameters:
    -----------
    simulation : WaveSimulation
        Surface to disturb
    config : RainfallConfig | None
        Drop cadence and magnitudes (defaults to RainfallConfig())
    historyLength : int
        Number of most recent drops kept in `drops`

    Raises:
    -------
    ValueError : If the cadence, magnitude range or margin is unusable
        for the simulation grid
    '''

    def __init__(
        self,
        simulation: WaveSimulation,
        config: RainfallConfig | None = None,
        historyLength: int = const.rainHistoryLength,
    ) -> None:
        self._simulation = simulation
        self._config = config or RainfallConfig()

        cfg = self._config
        if cfg.interval <= 0.0:
            raise ValueError(f'interval must be > 0, got {cfg.interval}')
        if cfg.minMagnitude > cfg.maxMagnitude:
            raise ValueError(
                f'minMagnitude {cfg.minMagnitude} exceeds maxMagnitude {cfg.maxMagnitude}'
            )

        # Drops must land inside the disturbable interior
        margin = cfg.edgeMargin
        self._rowRange = (margin, simulation.rowCount() - 1 - margin)
        self._colRange = (margin, simulation.columnCount() - 1 - margin)
        if margin < 1 or self._rowRange[0] > self._rowRange[1] or self._colRange[0] > self._colRange[1]:
            raise ValueError(
                f'edgeMargin {margin} leaves no room for drops on a '
                f'{simulation.rowCount()} x {simulation.columnCount()} grid'
            )

        self._rng = np.random.default_rng(cfg.seed)
        self._clock: float = 0.0
        self._nextDropTime: float = cfg.interval
        self._drops: deque[Drop] = deque(maxlen=historyLength)
        self._nDrops: int = 0

    @property
    def drops(self) -> list[Drop]:
        '''Most recent drops (up to historyLength), oldest first.'''
        return list(self._drops)

    @property
    def nDrops(self) -> int:
        '''Total drops applied, including those aged out of `drops`.'''
        return self._nDrops

    def update(self, elapsedSeconds: float) -> list[Drop]:
        '''
        Advance the rain clock and apply any drops that came due.

        Parameters:
        -----------
        elapsedSeconds : float
            Host time since the previous call [s]

        Returns:
        --------
        list[Drop] : Drops applied during this call
        '''
        self._clock += elapsedSeconds

        newDrops = []
        while self._clock >= self._nextDropTime:
            newDrops.append(self._dropAt(self._nextDropTime))
            self._nextDropTime += self._config.interval

        return newDrops

    def _dropAt(self, dropTime: float) -> Drop:
        cfg = self._config
        row = int(self._rng.integers(self._rowRange[0], self._rowRange[1], endpoint=True))
        col = int(self._rng.integers(self._colRange[0], self._colRange[1], endpoint=True))
        magnitude = float(self._rng.uniform(cfg.minMagnitude, cfg.maxMagnitude))

        self._simulation.disturb(row, col, magnitude)

        drop = Drop(time=dropTime, row=row, col=col, magnitude=magnitude)
        self._drops.append(drop)
        self._nDrops += 1
        return drop
