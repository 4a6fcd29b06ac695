# -- Simulation Frame Exporter -- #

'''
Exports height-field frames as JSON for offline viewing.

Collects height snapshots during a run and writes them to a single
compact JSON file along with the grid configuration and energy history.
Lattice x/z coordinates are not stored per frame; a viewer rebuilds them
from the config (rows, columns, spacing).
'''

from __future__ import annotations

import json
import os
from datetime import datetime

import numpy as np

from heightFieldWaves.solver.protocols import WaveConfig, WaveState


class FrameExporter:
    '''
    Collects and exports simulation frame data as JSON.

    Usage:
        exporter = FrameExporter()
        # During simulation loop:
        exporter.addFrame(state, simulation.heights)
        # After simulation:
        exporter.export(config, outputDir='output')

    Output JSON format:
    {
        "meta": { "type": "heightFieldWaves", "nFrames": 120, "created": "...", ... },
        "config": { "rows": 64, "columns": 64, "spacing": 1.0, ... },
        "frames": [
            { "time": 0.0, "step": 0, "heights": [[...], ...] },
            ...
        ],
        "energy": { "times": [...], "energy": [...], "maxHeight": [...] }
    }
    '''

    def __init__(self, decimals: int = 6) -> None:
        self._decimals = decimals
        self._frames: list[dict] = []
        self._heightFrames: list[np.ndarray] = []
        self._energyHistory: dict[str, list[float]] = {
            'times': [],
            'energy': [],
            'maxHeight': [],
        }

    @property
    def nFrames(self) -> int:
        '''Number of collected frames.'''
        return len(self._frames)

    @property
    def heightFrames(self) -> list[np.ndarray]:
        '''Copies of the recorded height grids, oldest first.'''
        return list(self._heightFrames)

    @property
    def energyHistory(self) -> dict[str, list[float]]:
        return self._energyHistory

    def addFrame(self, state: WaveState, heights: np.ndarray) -> None:
        '''
        Record a simulation frame.

        Parameters:
        -----------
        state : WaveState
            Diagnostics snapshot for the frame
        heights : np.ndarray
            Current height grid, shape (m, n). Copied.
        '''
        snapshot = np.array(heights, dtype=np.float64, copy=True)
        self._heightFrames.append(snapshot)

        # Height lists are built at export time from the single ndarray copy
        self._frames.append({
            'time': round(state.time, 6),
            'step': state.step,
        })

        self._energyHistory['times'].append(round(state.time, 6))
        self._energyHistory['energy'].append(round(state.energy, 6))
        self._energyHistory['maxHeight'].append(round(state.maxHeight, 6))

    def export(
        self,
        config: WaveConfig,
        outputDir: str = 'heightFieldWaves/output',
        scenarioName: str = 'rainfall',
    ) -> str:
        '''
        Write all collected frames to a JSON file.

        Parameters:
        -----------
        config : WaveConfig
            Simulation configuration for metadata
        outputDir : str
            Output directory path
        scenarioName : str
            Scenario name for the filename

        Returns:
        --------
        str : Path to the exported JSON file
        '''
        os.makedirs(outputDir, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = f'heightFieldWaves_{scenarioName}_{timestamp}.json'
        filepath = os.path.join(outputDir, filename)

        output = {
            'meta': {
                'type': 'heightFieldWaves',
                'nFrames': len(self._frames),
                'vertexCount': config.vertexCount,
                'courantNumber': round(config.courantNumber, 6),
                'created': datetime.now().isoformat(),
            },
            'config': config.toDict(),
            'frames': [
                {**frame, 'heights': np.round(heights, self._decimals).tolist()}
                for frame, heights in zip(self._frames, self._heightFrames)
            ],
            'energy': self._energyHistory,
        }

        with open(filepath, 'w') as f:
            json.dump(output, f, indent=None, separators=(',', ':'))

        return filepath
