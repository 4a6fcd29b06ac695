# -- Numerical Constants for Height-Field Wave Simulation -- #

'''
Default grid, time-stepping and disturbance constants for the
height-field wave simulation. All lengths in world units, times in
seconds.

References:
-----------
Courant, Friedrichs, Lewy (1928) -- On the partial difference equations
of mathematical physics
Strikwerda (2004) -- Finite Difference Schemes and Partial Differential
Equations
'''

import math

#--------------------------------------------------------------------#
# -- Grid Limits -- #
#--------------------------------------------------------------------#

# Minimum rows / columns: one fixed boundary ring plus a two-cell interior
minGridSize: int = 4

# Damping must stay below this for the explicit scheme to remain bounded
maxDamping: float = 2.0

#--------------------------------------------------------------------#
# -- Stability -- #
#--------------------------------------------------------------------#

# CFL-like bound for the 5-point explicit scheme in 2D:
# waveSpeed * dt / dx <= 1 / sqrt(2)
# Advisory only -- the solver accepts unstable configurations
stabilityBound: float = 1.0 / math.sqrt(2.0)

#--------------------------------------------------------------------#
# -- Default Lake -- #
#--------------------------------------------------------------------#

defaultRows: int = 305
defaultColumns: int = 150
defaultSpacing: float = 1.0
defaultTimeStep: float = 0.03
defaultWaveSpeed: float = 4.0
defaultDamping: float = 0.2

#--------------------------------------------------------------------#
# -- Rainfall (host-side disturbance cadence) -- #
#--------------------------------------------------------------------#

# Seconds of host time between random drops
rainInterval: float = 0.25

# Drop magnitude range [world units of height]
rainMinMagnitude: float = 0.2
rainMaxMagnitude: float = 0.5

# Drops land at least this many cells away from the grid edge
rainEdgeMargin: int = 4

# Most recent drops kept by a scheduler for inspection
rainHistoryLength: int = 1024
