# -- Simulation Scenarios Package -- #

'''
Host-side scenarios that drive the height-field surface.

Each scenario owns its own scheduling state and only talks to the
solver through WaveSimulation's public methods.
'''

from heightFieldWaves.scenarios.rainfall import RainfallConfig, RainfallScheduler, Drop
