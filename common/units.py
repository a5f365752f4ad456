"""
Unit Registry for Angle and Length Quantities.

This module provides a centralized unit system using the `pint` library so
that angles and distances entering the projection engine carry their
units. The engine works internally in degrees (angles) and meters
(lengths); quantities in any compatible unit are converted at the
boundary, and incompatible units raise errors instead of silently
corrupting a projection by kilometers.

Example Usage
-------------
>>> from common.units import Q_, angle_in_degrees
>>> latitude_deg = angle_in_degrees(Q_(0.6472, "radian"))
>>> round(latitude_deg, 4)
37.0818
"""

from functools import wraps
from typing import Callable, Union
import inspect

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

AngleLike = Union[float, pint.Quantity]
LengthLike = Union[float, pint.Quantity]


def validate_units(expected_units: dict[str, str]):
    """Decorator converting quantity arguments to plain numbers.

    Each named argument given as a pint quantity is converted to the
    expected unit and replaced by its float magnitude before the wrapped
    function runs, so the function body only ever sees numbers in the
    engine's canonical units. Bare numbers are taken to be in the expected
    unit already.

    Parameters
    ----------
    expected_units : dict[str, str]
        Mapping from argument names to the unit they are converted to.

    Raises
    ------
    ValueError
        If a quantity cannot be converted (wrong dimension).

    Examples
    --------
    >>> @validate_units({'latitude': 'degree'})
    ... def half(latitude):
    ...     return latitude / 2
    >>> half(Q_(180, 'arcminute'))
    1.5
    """
    def decorator(func: Callable) -> Callable:
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound = sig.bind(*args, **kwargs)

            for param_name, unit in expected_units.items():
                if param_name in bound.arguments:
                    try:
                        bound.arguments[param_name] = _magnitude_in(bound.arguments[param_name], unit)
                    except ValueError as e:
                        raise ValueError(
                            f"Parameter '{param_name}' must be convertible to {unit}: {e}"
                        ) from e

            return func(*bound.args, **bound.kwargs)
        return wrapper
    return decorator


def _magnitude_in(value: Union[float, pint.Quantity], unit: str) -> float:
    if isinstance(value, pint.Quantity):
        try:
            return float(value.to(unit).magnitude)
        except pint.DimensionalityError as e:
            raise ValueError(
                f"Cannot interpret {value} as {unit}: incompatible units"
            ) from e
    return float(value)


def angle_in_degrees(value: AngleLike) -> float:
    """Return an angle as a float in degrees.

    Parameters
    ----------
    value : float or pint.Quantity
        A pint angle in any angular unit, or a bare number already
        expressed in degrees.

    Returns
    -------
    float
        The angle in degrees.

    Raises
    ------
    ValueError
        If a quantity without angular dimension is given.
    """
    return _magnitude_in(value, "degree")


def length_in_meters(value: LengthLike) -> float:
    """Return a length as a float in meters.

    Parameters
    ----------
    value : float or pint.Quantity
        A pint length in any unit, or a bare number in meters.

    Returns
    -------
    float
        The length in meters.
    """
    return _magnitude_in(value, "meter")


# Standard unit definitions for the system
STANDARD_UNITS = {
    "latitude": "degree",
    "longitude": "degree",
    "easting": "meter",
    "northing": "meter",
}
