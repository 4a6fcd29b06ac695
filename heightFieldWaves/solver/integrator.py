# -- Explicit Finite-Difference Wave Integrator -- #

'''
Time integration of the damped 2D wave equation on a height field.

The continuous equation

    d2h/dt2 + d * dh/dt = c^2 * (d2h/dx2 + d2h/dz2)

is discretised with central differences in both time and space.
Solving the resulting recurrence for the next time level gives

    next = k1 * prev + k2 * curr + k3 * (sum of 4 axis neighbours of curr)

with

    e  = c^2 * dt^2 / dx^2
    k1 = (d*dt - 2) / (d*dt + 2)
    k2 = (4 - 8e)   / (d*dt + 2)
    k3 = (2e)       / (d*dt + 2)

Boundary rows and columns are copied unchanged, acting as a fixed-height
frame. The scheme is only bounded while c * dt / dx <= 1 / sqrt(2); this
is not checked at runtime (see WaveConfig.isStable).

References:
-----------
Strikwerda (2004) -- Finite Difference Schemes and Partial Differential
Equations, ch. 8
Luna (2016) -- Introduction to 3D Game Programming with DirectX 12, ch. 7
'''

from __future__ import annotations

from heightFieldWaves.solver.gridState import GridState


class FiniteDifferenceIntegrator:
    '''
    Explicit central-difference integrator for the damped wave equation.

    Coefficients are derived once from the grid's constants. Every call
    to step() fills the grid's next buffer from previous and current,
    then rotates the buffer roles.

    The interior update is a single vectorized NumPy expression over
    shifted slices; output lands in a separate buffer so there are no
    read/write hazards between neighbouring cells.

    Parameters:
    -----------
    grid : GridState
        Height-field state to advance
    '''

    def __init__(self, grid: GridState) -> None:
        self._grid = grid

        dt = grid.timeStep
        dx = grid.spacing
        dampingTerm = grid.damping * dt
        e = (grid.waveSpeed * dt / dx) ** 2

        self._k1 = (dampingTerm - 2.0) / (dampingTerm + 2.0)
        self._k2 = (4.0 - 8.0 * e) / (dampingTerm + 2.0)
        self._k3 = (2.0 * e) / (dampingTerm + 2.0)

    @property
    def coefficients(self) -> tuple[float, float, float]:
        '''Recurrence coefficients (k1, k2, k3).'''
        return (self._k1, self._k2, self._k3)

    @property
    def grid(self) -> GridState:
        return self._grid

    def step(self) -> None:
        '''
        Advance the height field by exactly one fixed time step.

        1. next[interior] = k1*prev + k2*curr + k3*(N + S + E + W)
        2. next[boundary] = curr[boundary]
        3. Rotate: prev <- curr, curr <- next
        '''
        g = self._grid
        prev = g.previous
        curr = g.current
        nxt = g.next

        neighbourSum = (
            curr[2:, 1:-1] + curr[:-2, 1:-1]
            + curr[1:-1, 2:] + curr[1:-1, :-2]
        )
        nxt[1:-1, 1:-1] = (
            self._k1 * prev[1:-1, 1:-1]
            + self._k2 * curr[1:-1, 1:-1]
            + self._k3 * neighbourSum
        )

        # Fixed frame
        nxt[0, :] = curr[0, :]
        nxt[-1, :] = curr[-1, :]
        nxt[:, 0] = curr[:, 0]
        nxt[:, -1] = curr[:, -1]

        g.rotate()
