# -- heightFieldWaves Package -- #

'''
Dynamic height-field water surface.

Explicit finite-difference solver for the damped 2D wave equation,
producing per-vertex positions and normals for a renderer every frame,
plus host-side raindrop scheduling, JSON/mesh export and Plotly
diagnostics.
'''

__version__ = '0.1.0'

from heightFieldWaves.solver.errors import WaveSimError, InvalidConfigError, OutOfRangeError
from heightFieldWaves.solver.protocols import WaveConfig, WaveState
from heightFieldWaves.waves import WaveSimulation
