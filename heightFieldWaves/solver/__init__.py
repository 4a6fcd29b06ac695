# -- Height-Field Solver Package -- #

'''
Core height-field wave solver.

Provides the grid state, explicit finite-difference integrator,
disturbance injector, normal estimator and fixed-step frame stepper.
'''

from heightFieldWaves.solver.errors import WaveSimError, InvalidConfigError, OutOfRangeError
from heightFieldWaves.solver.protocols import WaveConfig, WaveState
from heightFieldWaves.solver.gridState import GridState
from heightFieldWaves.solver.integrator import FiniteDifferenceIntegrator
from heightFieldWaves.solver.disturbance import DisturbanceInjector
from heightFieldWaves.solver.normals import NormalEstimator
from heightFieldWaves.solver.frameStepper import FrameStepper
