# -- Fixed-Step Frame Stepper -- #

'''
Decouples simulation stability from the rendering frame rate.

Variable real elapsed time is accumulated into a residual, and the
integrator runs a whole number of fixed dt sub-steps:

    residual += elapsed
    while residual >= dt:
        integrator.step()
        residual -= dt

No interpolation is done between sub-steps, so the visible surface always
sits at an exact multiple of dt of simulated time. Leftover time carries
over to the next frame.
'''

from __future__ import annotations

import math

from heightFieldWaves.solver.protocols import Integrator


class FrameStepper:
    '''
    Accumulates frame time and drives a fixed-step integrator.

    Parameters:
    -----------
    integrator : Integrator
        Fixed-step integrator to drive
    timeStep : float
        Fixed sub-step size dt [s]
    '''

    def __init__(self, integrator: Integrator, timeStep: float) -> None:
        self._integrator = integrator
        self._timeStep = timeStep
        self._residual: float = 0.0
        self._stepCount: int = 0

    @property
    def residual(self) -> float:
        '''Accumulated time not yet consumed by a sub-step [s].'''
        return self._residual

    @property
    def stepCount(self) -> int:
        '''Total sub-steps taken.'''
        return self._stepCount

    @property
    def simulatedTime(self) -> float:
        '''Simulated time, stepCount * dt [s].'''
        return self._stepCount * self._timeStep

    def advance(self, elapsedSeconds: float) -> int:
        '''
        Consume elapsed host time in fixed sub-steps.

        Parameters:
        -----------
        elapsedSeconds : float
            Real time since the previous call [s], >= 0

        Returns:
        --------
        int : Number of sub-steps taken during this call

        Raises:
        -------
        ValueError : If elapsedSeconds is negative or not finite
        '''
        if not math.isfinite(elapsedSeconds) or elapsedSeconds < 0.0:
            raise ValueError(
                f'elapsedSeconds must be finite and >= 0, got {elapsedSeconds!r}'
            )

        self._residual += elapsedSeconds

        subSteps = 0
        while self._residual >= self._timeStep:
            self._integrator.step()
            self._residual -= self._timeStep
            subSteps += 1

        self._stepCount += subSteps
        return subSteps

    def reset(self) -> None:
        '''Drop the residual and step count.'''
        self._residual = 0.0
        self._stepCount = 0
