# -- Wave Solver Errors -- #

'''
Exception types raised by the height-field wave solver.

Both concrete errors subclass the builtin exception a caller would
already expect (ValueError for bad configuration, IndexError for bad
grid indices), so existing handlers keep working.
'''


class WaveSimError(Exception):
    '''Base class for all height-field wave solver errors.'''


class InvalidConfigError(WaveSimError, ValueError):
    '''
    Raised when a grid or time-stepping parameter is out of range.

    Fatal to the simulation object: a GridState is never built from an
    invalid configuration.
    '''


class OutOfRangeError(WaveSimError, IndexError):
    '''
    Raised when a row/column or vertex index falls outside its valid range.

    Local to the call that raised it. The height field is left untouched,
    so the caller may retry with valid indices.
    '''
