"""
Global options controlling unit formatting, quantity normalisation and
the simplification rule cache.
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, replace

# Written by the pyqty developers, 2024.

# ======================================================================


@dataclass(frozen=True, kw_only=True)
class UnitOptions:
    """
    Immutable snapshot of the unit handling options.  Fields are
    described in `set_unit_options`.
    """
    cache_simplify: bool
    normalize_decades: int
    unicode_str: bool

    def __post_init__(self):
        if (not isinstance(self.normalize_decades, int) or
                self.normalize_decades < 1):
            raise ValueError("'normalize_decades' must be an integer "
                             ">= 1.")


# Active options.
_unit_options = UnitOptions(cache_simplify=True, normalize_decades=3,
                            unicode_str=True)


# ----------------------------------------------------------------------

def get_unit_options() -> UnitOptions:
    """
    Returns a copy of the active `UnitOptions`.  Changing options is
    done using `set_unit_options` or `unit_options`.
    """
    return replace(_unit_options)


# noinspection PyIncorrectDocstring
def set_unit_options(**kwargs):
    """
    Change one or more of the active unit options.  Unknown option
    names raise `TypeError` and invalid values `ValueError`.

    Parameters
    ----------
    cache_simplify : bool, default = True
        If `True`, the simplification rule found for a given pair of
        (source shape, target shape) is cached for faster repeat
        access.  Only the rule is cached; the scalar factor is always
        recomputed from the unit variants actually involved.

        The cache is unbounded; in practice only a handful of shape
        pairs are ever simplified.

    normalize_decades : int, default = 3
        `Quantity.normalize()` steps units to bring the magnitude of
        the value into the range ``[1, 10**normalize_decades)``.

    unicode_str : bool, default = True
        Use unicode superscripts for powers in `str()` of units and
        quantities, otherwise `^`.

    See Also
    --------
    get_unit_options, unit_options

    Examples
    --------
    Powers are shown as unicode superscripts by default:

    >>> from pyqty.units import qty, set_unit_options
    >>> area = qty(4.0, 'm').squared()
    >>> print(area)
    16.0 m²

    Otherwise a caret is used:

    >>> set_unit_options(unicode_str=False)
    >>> print(area)
    16.0 m^2
    >>> set_unit_options(unicode_str=True)
    """
    global _unit_options
    _unit_options = replace(_unit_options, **kwargs)


@contextmanager
def unit_options(**kwargs):
    """
    Context manager that applies `set_unit_options` for the duration of
    a ``with`` block, then restores the previous options (even if an
    exception was raised).

    >>> from pyqty.units import qty, unit_options
    >>> with unit_options(unicode_str=False):
    ...     print(qty(3.0, 's').cubed())
    27.0 s^3
    """
    global _unit_options
    saved = _unit_options
    set_unit_options(**kwargs)
    try:
        yield get_unit_options()
    finally:
        _unit_options = saved
