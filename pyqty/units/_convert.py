"""
Conversion between units.  Any two units of the same dimension are
interconvertible by a single scalar factor computed from their scales;
units of different dimension can only be converted through an explicitly
registered physical relationship (e.g. mass <-> energy).
"""
from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from numbers import Number
from typing import Union

from ._base import Unit
from ._dimension import Dimension
from .exception import DimensionError
from pyqty.types import coax_type

# Written by the pyqty developers, 2024.

# ======================================================================


@dataclass(frozen=True)
class Conversion:
    """
    The result of planning a unit change: the `target` unit and the
    scalar `factor` that a value must be multiplied by to be expressed
    in it.
    """
    target: Unit
    factor: float

    def apply(self, value):
        """Return `value` rescaled to the target unit."""
        if self.factor == 1:
            return value
        return value * self.factor

    def quantity(self, value):
        """Return a `Quantity` holding rescaled `value` in the target
        unit."""
        return self.target.quantity(self.apply(value))

    def then(self, other: Conversion) -> Conversion:
        """Chain another conversion after this one."""
        return Conversion(other.target, self.factor * other.factor)


# ----------------------------------------------------------------------

def conversion_factor(from_unit: Unit, to_unit: Unit) -> float:
    """
    Return the factor that converts a value from `from_unit` to
    `to_unit`, i.e. ``scale(from) / scale(to)``.  This is only defined
    for units of the same dimension.  Identical units give exactly one.

    >>> from pyqty.units import get_unit
    >>> conversion_factor(get_unit('km'), get_unit('m'))
    1000.0

    Raises
    ------
    DimensionError
        If the dimensions differ.
    """
    from_dim, to_dim = from_unit.dimension(), to_unit.dimension()
    if from_dim != to_dim:
        raise DimensionError(
            f"Cannot convert '{from_unit}' [{from_dim}] to '{to_unit}' "
            f"[{to_dim}]: Dimensions differ.", from_dim=from_dim,
            to_dim=to_dim)

    if from_unit == to_unit:
        return 1.0
    return from_unit.scale() / to_unit.scale()


def convert_factor(from_unit: Unit, to_unit: Unit) -> float:
    """
    As for `conversion_factor` but units of different dimension are
    also accepted if a relationship between the dimensions has been
    registered with `set_relationship`.  The relationship factor applies
    between the coherent SI units of each dimension.

    Raises
    ------
    DimensionError
        If the dimensions differ and no relationship exists.
    """
    from_dim, to_dim = from_unit.dimension(), to_unit.dimension()
    if from_dim == to_dim:
        return conversion_factor(from_unit, to_unit)

    try:
        _, fwd = _RELATIONSHIPS[from_dim, to_dim]
    except KeyError:
        raise DimensionError(
            f"Cannot convert '{from_unit}' [{from_dim}] to '{to_unit}' "
            f"[{to_dim}]: Dimensions differ and no relationship is "
            f"defined.", from_dim=from_dim, to_dim=to_dim) from None

    return from_unit.scale() * fwd / to_unit.scale()


def convert(value, from_unit: Union[Unit, str], to_unit: Union[Unit, str]):
    """
    Convert ``value`` currently in ``from_unit`` to requested
    ``to_unit``.  This is used for doing conversions without using
    `Quantity` objects.

    Examples
    --------
    >>> length = 1.5  # Kilometres.
    >>> m_length = convert(length, from_unit='km', to_unit='m')
    >>> print(f"Length = {m_length} m.")
    Length = 1500.0 m.

    Parameters
    ----------
    value : scalar or array-like
        Value (not `Quantity` object) for conversion.
    from_unit : Unit or str
        Unit of ``value``.
    to_unit : Unit or str
        Target unit.

    Returns
    -------
    result : scalar or array-like
        Converted value using new unit.  Integer values remain integer
        where the result is a whole number.
    """
    from ._parse import to_unit as _to_unit

    from_unit, to_unit = _to_unit(from_unit), _to_unit(to_unit)
    if from_unit == to_unit:
        return value  # Shortcut for identical units.

    result = value * convert_factor(from_unit, to_unit)
    if isinstance(value, (int, Fraction)) and not isinstance(value, bool):
        result = coax_type(result, int, default=result)
    return result


# ----------------------------------------------------------------------

def block_relationship(from_dim: Dimension, to_dim: Dimension):
    """
    Remove a registered relationship `from_dim` -> `to_dim` (the
    reverse direction, if any, is unaffected).

    Raises
    ------
    ValueError
        If no such relationship exists.
    """
    try:
        del _RELATIONSHIPS[from_dim, to_dim]
    except KeyError:
        raise ValueError(f"No relationship [{from_dim}] -> [{to_dim}] "
                         f"defined.") from None


def relationships() -> dict[tuple[Dimension, Dimension], tuple[str, float]]:
    """Return a copy of the registered relationships, as
    ``{(from_dim, to_dim): (name, factor)}``."""
    return dict(_RELATIONSHIPS)


def set_relationship(from_dim: Dimension, to_dim: Dimension, *,
                     fwd: Number, rev: Number | str | None = 'auto',
                     name: str = None):
    """
    Set a physical relationship allowing conversion between quantities
    of different dimension, such as mass and energy (``E = m·c²``).

    Parameters
    ----------
    from_dim,to_dim : Dimension
        Dimensions being related.  These must differ.
    fwd : Number
        Multiplier converting a value in the coherent SI unit of
        `from_dim` to the coherent SI unit of `to_dim`.
    rev : Number or str, optional
        Value of reverse conversion to -> from:

        - If rev == None, no reverse conversion is added.
        - If rev == 'auto' then the reverse is ``1 / fwd``.
    name : str, optional
        Description of the relationship, e.g. ``'E = mc²'``.

    Raises
    ------
    ValueError
        If the dimensions are the same, or if a relationship in either
        requested direction already exists.
    """
    if from_dim == to_dim:
        raise ValueError("Relationship requires different dimensions.")

    if rev == 'auto':
        rev = 1 / fwd

    pairs = [((from_dim, to_dim), fwd)]
    if rev is not None:
        pairs.append(((to_dim, from_dim), rev))

    for key, _ in pairs:
        if key in _RELATIONSHIPS:
            raise ValueError(f"Relationship [{key[0]}] -> [{key[1]}] "
                             f"already defined.")

    for key, factor in pairs:
        _RELATIONSHIPS[key] = (name, factor)


# == Private Attributes ================================================

_RELATIONSHIPS: dict[tuple[Dimension, Dimension], tuple[str, float]] = {}
