# -- Height-Field Disturbance Injector -- #

'''
Localized impulses that seed ripples on the height field.

A disturbance adds its magnitude to one cell of the current heights and
half of it to each of the four axis neighbours. Only the current buffer
changes, so the previous buffer still holds the undisturbed surface and
the next integration step sees the impulse as an initial velocity.
'''

from __future__ import annotations

from heightFieldWaves.solver.errors import OutOfRangeError
from heightFieldWaves.solver.gridState import GridState, isIndex


class DisturbanceInjector:
    '''
    Applies additive impulses to the current height buffer.

    Parameters:
    -----------
    grid : GridState
        Height-field state to disturb
    '''

    def __init__(self, grid: GridState) -> None:
        self._grid = grid

    def isValidCell(self, row: int, col: int) -> bool:
        '''Whether (row, col) lies in the disturbable interior.'''
        return (
            isIndex(row) and isIndex(col)
            and 1 <= row <= self._grid.rows - 2
            and 1 <= col <= self._grid.columns - 2
        )

    def disturb(self, row: int, col: int, magnitude: float) -> None:
        '''
        Add an impulse centred on (row, col).

        Parameters:
        -----------
        row : int
            Grid row, 1 <= row <= m - 2
        col : int
            Grid column, 1 <= col <= n - 2
        magnitude : float
            Height added at the centre; half of it goes to each neighbour

        Raises:
        -------
        OutOfRangeError : If (row, col) is not an integer interior cell.
            The height field is left unchanged.
        '''
        if not self.isValidCell(row, col):
            raise OutOfRangeError(
                f'disturbance at ({row}, {col}) outside interior '
                f'[1, {self._grid.rows - 2}] x [1, {self._grid.columns - 2}]'
            )

        halfMagnitude = 0.5 * magnitude
        curr = self._grid.current

        curr[row, col] += magnitude
        curr[row + 1, col] += halfMagnitude
        curr[row - 1, col] += halfMagnitude
        curr[row, col + 1] += halfMagnitude
        curr[row, col - 1] += halfMagnitude
