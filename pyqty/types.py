"""
Helpers for moving quantity values between numeric types.
"""

import numbers

import numpy as np


# Written by the pyqty developers, 2024.

# ======================================================================


def coax_type(x, *types, default=None):
    """
    Return `x` as the first of `types` that represents it without loss,
    i.e. where ``t(x) - x == 0``.  This is how unit conversions keep
    integer values integer when the converted result is whole.

    Examples
    --------
    >>> coax_type(2500.0, int)  # 2.5 km in m.
    2500
    >>> coax_type(0.3048, int, float)  # 1 ft in m stays float.
    0.3048
    >>> coax_type(float('inf'), int, default=-1)
    -1

    Parameters
    ----------
    x :
        Value to convert.  Only numbers can succeed.
    types : type
        Candidate types, tried in order.
    default :
        Returned if no candidate type fits.

    Returns
    -------
    x_converted :
        `x` as the first fitting type, otherwise `default`.

    Raises
    ------
    ValueError
        If `default` is None and no candidate type fits.
    """
    if isinstance(x, numbers.Number):
        for to_type in types:
            try:
                res = to_type(x)
            except (TypeError, ValueError, OverflowError):
                continue  # e.g. int(nan), int(inf), float(complex).

            if res - x == 0:
                return res

    if default is None:
        raise ValueError(f"Can't represent {x!r} exactly as "
                         f"{' or '.join(t.__name__ for t in types)}.")
    return default


def cast_value(x, to_type):
    """
    Cast a plain numeric value (or array) to `to_type`.  Arrays are cast
    elementwise using ``astype``.  Unlike `coax_type` the cast may lose
    information (e.g. ``float`` -> ``int`` truncates), however values
    that have no representation in the new type (NaN or infinity to
    ``int``) raise an exception.

    >>> cast_value(2.7, int)
    2
    >>> cast_value(np.array([1.5, 2.5]), int)
    array([1, 2])

    Raises
    ------
    ValueError, OverflowError or TypeError
        If the cast is not possible.
    """
    if isinstance(x, np.ndarray):
        if np.issubdtype(np.dtype(to_type), np.integer) and \
                not np.all(np.isfinite(x)):
            raise ValueError("Cannot cast non-finite values to integer.")
        return x.astype(to_type)
    return to_type(x)
