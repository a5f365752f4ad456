"""
Error taxonomy of the projection engine.

Both errors are terminal for the single call that raised them; the
computation is deterministic, so retrying cannot help.
"""

from typing import Optional


class GeotumError(Exception):
    """Base class for projection engine errors."""


class OutOfDomainError(GeotumError, ValueError):
    """Latitude lies beyond the +/-84 degree limit of the UTM grid.

    Attributes
    ----------
    latitude : float or None
        The offending latitude in degrees (None for batch rejections).
    """

    def __init__(self, message: str, latitude: Optional[float] = None):
        super().__init__(message)
        self.latitude = latitude


class ConvergenceError(GeotumError, ArithmeticError):
    """Newton iteration for the conformal latitude did not converge.

    Attributes
    ----------
    iterations : int
        Number of iterations performed before giving up.
    last_step : float
        Magnitude of the final Newton step.
    """

    def __init__(self, message: str, iterations: int, last_step: float):
        super().__init__(message)
        self.iterations = iterations
        self.last_step = last_step
