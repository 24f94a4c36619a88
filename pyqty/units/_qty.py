from __future__ import annotations

import math
import operator
import warnings
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

import numpy as np

from ._base import Unit, UnitMul, UnitDiv, UnitInv, _is_value
from ._concrete import UnitFamily, get_unit
from ._convert import Conversion, conversion_factor, convert_factor
from ._dimension import _to_exp
from ._opts import get_unit_options, unit_options
from ._simplify import simplify, simplify_left, simplify_right
from .exception import DimensionError, ShapeError, UnitDomainError
from pyqty.types import cast_value

# Written by the pyqty developers, 2024.

T = TypeVar('T')


# ======================================================================

@dataclass(frozen=True, eq=False)
class Quantity:
    """
    ``Quantity`` represents a physical quantity, consisting of a `value`
    and the `unit` it is expressed in.  ``Quantity`` objects can be used
    in mathematical expressions and the unit is carried through
    automatically.

    ``Quantity`` objects are immutable.  Every operation, including
    ``+=`` style operators, gives a new object.

    The value can be any numeric type (``int``, ``float``, ``complex``,
    ``Fraction``) or a numpy array.

    .. note:: ``Quantity`` objects are not normally created directly.
       Refer to factory function ``qty()`` for normal construction
       methods.
    """
    value: Any
    unit: Unit

    __array_ufunc__ = None  # See `Unit`.

    def __post_init__(self):
        if isinstance(self.unit, UnitFamily):
            object.__setattr__(self, 'unit', self.unit.base)
        if not isinstance(self.unit, Unit):
            raise TypeError(f"Expected a unit, got "
                            f"{type(self.unit).__name__}.")

    # -- Unary Operators ------------------------------------------------

    def __abs__(self) -> Quantity:
        return Quantity(abs(self.value), self.unit)

    def __complex__(self) -> complex:
        """
        Returns complex(self.value).

        .. note:: Units are removed and checking ability is lost.
        """
        return complex(self.value)

    def __float__(self) -> float:
        """
        Returns float(self.value).

        .. note:: Units are removed and checking ability is lost.
        """
        return float(self.value)

    def __int__(self) -> int:
        """
        Returns int(self.value).

        .. note:: Units are removed and checking ability is lost.
        """
        return int(self.value)

    def __neg__(self) -> Quantity:
        return Quantity(-self.value, self.unit)

    def __round__(self, n: int = None) -> Quantity:
        if isinstance(self.value, np.ndarray):
            return Quantity(np.round(self.value, n or 0), self.unit)
        return Quantity(round(self.value, n), self.unit)

    def __ceil__(self) -> Quantity:
        return self._apply(np.ceil, math.ceil)

    def __floor__(self) -> Quantity:
        return self._apply(np.floor, math.floor)

    def __trunc__(self) -> Quantity:
        return self._apply(np.trunc, math.trunc)

    ceil, floor, trunc = __ceil__, __floor__, __trunc__

    # -- Binary Operators -----------------------------------------------

    def __add__(self, rhs: Quantity) -> Quantity:
        """
        Add two quantities.  The right hand side is first converted to
        the unit of the left hand side, which is also the unit of the
        result.  Both must have the same unit shape.

        >>> print(qty(2.0, 'km') + qty(50.0, 'm'))
        2.05 km
        """
        if not isinstance(rhs, Quantity):
            return NotImplemented
        rhs = rhs.with_unit(self.unit)
        return Quantity(self.value + rhs.value, self.unit)

    def __sub__(self, rhs: Quantity) -> Quantity:
        """
        Subtract two quantities.  As for ``__add__`` the result keeps the
        unit of the left hand side.
        """
        if not isinstance(rhs, Quantity):
            return NotImplemented
        rhs = rhs.with_unit(self.unit)
        return Quantity(self.value - rhs.value, self.unit)

    def __mul__(self, rhs) -> Quantity:
        """
        Multiply by another quantity, a unit or a plain value.  Units are
        combined structurally, e.g. ``m * s`` gives ``m·s``; no
        simplification is done.
        """
        if isinstance(rhs, Quantity):
            return Quantity(self.value * rhs.value, UnitMul(self.unit, rhs.unit))
        if isinstance(rhs, UnitFamily):
            rhs = rhs.base
        if isinstance(rhs, Unit):
            return Quantity(self.value, UnitMul(self.unit, rhs))
        if _is_value(rhs):
            return Quantity(self.value * rhs, self.unit)
        return NotImplemented

    def __rmul__(self, lhs) -> Quantity:
        if isinstance(lhs, UnitFamily):
            lhs = lhs.base
        if isinstance(lhs, Unit):
            return Quantity(self.value, UnitMul(lhs, self.unit))
        if _is_value(lhs):
            return Quantity(lhs * self.value, self.unit)
        return NotImplemented

    def __truediv__(self, rhs) -> Quantity:
        if isinstance(rhs, Quantity):
            return Quantity(self.value / rhs.value, UnitDiv(self.unit, rhs.unit))
        if isinstance(rhs, UnitFamily):
            rhs = rhs.base
        if isinstance(rhs, Unit):
            return Quantity(self.value, UnitDiv(self.unit, rhs))
        if _is_value(rhs):
            return Quantity(self.value / rhs, self.unit)
        return NotImplemented

    def __rtruediv__(self, lhs) -> Quantity:
        if isinstance(lhs, UnitFamily):
            lhs = lhs.base
        if isinstance(lhs, Unit):
            return Quantity(1 / self.value, UnitDiv(lhs, self.unit))
        if _is_value(lhs):
            return Quantity(lhs / self.value, UnitInv(self.unit))
        return NotImplemented

    def __pow__(self, exp) -> Quantity:
        return self.pow(exp)

    # -- Comparison Operators -------------------------------------------

    def __lt__(self, rhs) -> bool:
        return _common_cmp(self, rhs, operator.lt)

    def __le__(self, rhs) -> bool:
        return _common_cmp(self, rhs, operator.le)

    def __eq__(self, rhs) -> bool:
        return _common_cmp(self, rhs, operator.eq)

    def __ne__(self, rhs) -> bool:
        return _common_cmp(self, rhs, operator.ne)

    def __ge__(self, rhs) -> bool:
        return _common_cmp(self, rhs, operator.ge)

    def __gt__(self, rhs) -> bool:
        return _common_cmp(self, rhs, operator.gt)

    def almost_eq(self, rhs: Quantity, rel_tol: float = 1e-9,
                  abs_tol: float = 0.0) -> bool:
        """
        Returns ``True`` if `rhs` (converted to the unit of this
        quantity) is equal to this quantity within the given tolerances.
        Array values must all be close.
        """
        rhs_value = _promote(rhs).value_as(self.unit)
        return bool(np.all(np.isclose(self.value, rhs_value, rtol=rel_tol,
                                      atol=abs_tol)))

    # -- Container Methods ----------------------------------------------

    def __getitem__(self, idx) -> Quantity:
        """Index into an array value, keeping the unit."""
        return Quantity(self.value[idx], self.unit)

    # -- String Magic Methods -------------------------------------------

    def __format__(self, format_spec: str) -> str:
        return format(self.value, format_spec) + f" {self.unit}"

    def __repr__(self) -> str:
        # Lowercase qty() used so that __repr__ builds use factory function.
        with unit_options(unicode_str=False):
            return f"qty({self.value!r}, '{self.unit}')"

    def __str__(self) -> str:
        return self.__format__('')

    # -- Unit Changes ---------------------------------------------------

    def cancel(self):
        """
        Remove the unit of a dimensionless quantity (e.g. ``m/km``),
        returning the plain value.

        Raises
        ------
        DimensionError
            If the quantity is not dimensionless.
        """
        if not self.unit.is_dimless():
            raise DimensionError(f"Cannot cancel '{self.unit}' "
                                 f"[{self.unit.dimension()}]: Not "
                                 f"dimensionless.",
                                 from_dim=self.unit.dimension())
        return Conversion(self.unit, self.unit.scale()).apply(self.value)

    def convert(self, template) -> Quantity:
        """
        Convert to the base unit of `template`, which can be a unit,
        family or named unit type.  For example ``convert('Speed')``
        gives a result in ``m/s``.
        """
        from ._parse import to_unit
        return self.convert_to(to_unit(template).base())

    def convert_to(self, unit) -> Quantity:
        """
        Convert to any unit of the same dimension (the shape may
        differ), or a different dimension where a relationship has been
        registered.

        >>> print(qty(2.0, 'kg*m/s^2').convert_to('N'))
        2.0 N

        Raises
        ------
        DimensionError
            If the dimensions differ and no relationship is registered.
        """
        from ._parse import to_unit
        unit = to_unit(unit)
        if unit == self.unit:
            return self
        return Conversion(unit, convert_factor(self.unit, unit)
                          ).quantity(self.value)

    def simplify(self, template) -> Quantity:
        """
        Rewrite the unit into the shape of `template` using a single
        registered simplification rule.  See `simplify`.

        >>> d = qty(90.0, 'km/h') * qty(2.0, 'h')
        >>> print(d)
        180.0 (km/h)·h
        >>> print(d.simplify('Length'))
        180.0 km
        """
        return simplify(self.unit, template).quantity(self.value)

    def simplify_left(self, template) -> Quantity:
        return simplify_left(self.unit, template).quantity(self.value)

    def simplify_right(self, template) -> Quantity:
        return simplify_right(self.unit, template).quantity(self.value)

    def value_as(self, unit):
        """
        Return the plain value of this quantity expressed in `unit`,
        which must have the same dimension.
        """
        from ._parse import to_unit
        unit = to_unit(unit)
        return Conversion(unit, conversion_factor(self.unit, unit)
                          ).apply(self.value)

    def value_as_base(self):
        """Return the value expressed in the base variant of this unit's
        shape."""
        return self.value_as(self.unit.base())

    def with_base(self) -> Quantity:
        """Return the equivalent quantity in the base variant of this
        unit's shape."""
        return self.with_unit(self.unit.base())

    def with_unit(self, unit) -> Quantity:
        """
        Return the equivalent quantity in a different variant of the
        same unit shape, e.g. ``km/h`` -> ``m/s``.

        Raises
        ------
        DimensionError
            If the dimensions differ.
        ShapeError
            If the dimensions match but the shapes differ (use
            `convert_to` or `simplify`).
        """
        from ._parse import to_unit
        unit = to_unit(unit)
        if unit == self.unit:
            return self

        factor = conversion_factor(self.unit, unit)
        if not self.unit.same_shape(unit):
            raise ShapeError(f"Cannot change '{self.unit}' to '{unit}': "
                             f"Different unit shapes.")
        return Conversion(unit, factor).quantity(self.value)

    def normalize(self) -> Quantity:
        """
        Step the unit up or down to bring the magnitude of the value into
        the range ``[1, 10**normalize_decades)`` (see `set_unit_options`)
        where the available unit variants permit.  Stepping stops at the
        end of a family, or where a step would overshoot the range.  The
        value is converted once from the original, so no precision is
        lost by stepping.

        >>> print(qty(12500.0, 'm').normalize())
        12.5 km

        A zero value gives the base unit.  Array values are normalized
        using the element with largest magnitude.  Non-finite values are
        returned unchanged, with a warning.
        """
        mag = float(np.max(np.abs(self.value)))  # Fraction gives object.
        if mag == 0:
            return self.with_base()
        if not np.isfinite(mag):
            warnings.warn(f"Cannot normalize non-finite value "
                          f"{self.value!r}.", RuntimeWarning)
            return self

        limit = get_unit_options().normalize_decades
        unit = self.unit

        def log_in(new_unit: Unit) -> float:
            return float(np.log10(mag * conversion_factor(self.unit,
                                                          new_unit)))

        log = log_in(unit)
        while log >= limit:
            step = unit.step_up()
            if step is None or (step_log := log_in(step)) < 0:
                break
            unit, log = step, step_log

        while log < 0:
            step = unit.step_down()
            if step is None or (step_log := log_in(step)) >= limit:
                break
            unit, log = step, step_log

        return self.with_unit(unit)

    # -- Numeric Methods ------------------------------------------------

    def cbrt(self) -> Quantity:
        return self.root(3)

    def cubed(self) -> Quantity:
        return self.pow(3)

    def inv(self) -> Quantity:
        return Quantity(1 / self.value, UnitInv(self.unit))

    def mul_add(self, q_mul: Quantity, q_add: Quantity) -> Quantity:
        """
        Returns ``self * q_mul + q_add``, where `q_add` must have the same
        shape as the product (and is converted to its unit).
        """
        return self * q_mul + q_add

    def pow(self, exp) -> Quantity:
        """
        Raise to a (possibly rational) power.

        Raises
        ------
        UnitDomainError
            If `exp` is zero.
        """
        unit = self.unit.pow(exp)
        return Quantity(_value_pow(self.value, _to_exp(exp)), unit)

    def root(self, degree: int) -> Quantity:
        """
        Take the root of integer `degree`.

        Raises
        ------
        UnitDomainError
            If `degree` is zero.
        """
        unit = self.unit.root(degree)
        return Quantity(_value_pow(self.value, _to_exp(1) / degree), unit)

    def sqrt(self) -> Quantity:
        return self.root(2)

    def squared(self) -> Quantity:
        return self.pow(2)

    def value_cast(self, to_type: type) -> Quantity:
        """
        Return a quantity with the value cast to a different numeric
        type, e.g. ``float`` -> ``int``.

        Raises
        ------
        UnitDomainError
            If the value cannot be represented (e.g. NaN or infinity to
            ``int``).
        """
        try:
            return Quantity(cast_value(self.value, to_type), self.unit)
        except (ValueError, OverflowError, TypeError) as e:
            raise UnitDomainError(f"Cannot cast {self.value!r} to "
                                  f"{to_type.__name__}.") from e

    # -- Private Methods ------------------------------------------------

    def _apply(self, array_fn: Callable, scalar_fn: Callable) -> Quantity:
        if isinstance(self.value, np.ndarray):
            return Quantity(array_fn(self.value), self.unit)
        return Quantity(scalar_fn(self.value), self.unit)


# ----------------------------------------------------------------------

def qty(value: Quantity | Unit | T | str = 1, unit: Unit | str = None
        ) -> Quantity:
    """
    This factory function is the preferred way to construct a
    `Quantity`.  The following argument combinations are possible:

        - ``qty(value, unit)``: Normal construction.  `unit` can be a
          `Unit`, a `UnitFamily` (giving its base unit) or a unit string.
        - ``qty(unit)``: If a unit is passed as the only argument, the
          value is one.
        - ``qty('5.0 m/s^2')``: A string giving a complete quantity
          expression is parsed (see `parse_qty`).
        - ``qty(value)``: A plain value is given the dimensionless unit
          ``1``.
        - ``qty()``: Value = 1 (integer) and dimensionless.
        - ``qty(Quantity)``: Returns the `Quantity` argument directly (no
          effect).
        - ``qty(Quantity, unit)``: Returns the `Quantity` converted to
          the given `unit` (see `Quantity.convert_to`).

    Unit strings use the expression syntax of `parse_unit`, e.g.
    ``'kg*m/s^2'``, ``'1/s'``, ``'(m/s)^2'``.

    Examples
    --------
    >>> print(qty(9.81, 'm/s^2'))
    9.81 m/s²
    >>> print(qty('2.0 km + 50.0 m in m'))
    2050.0 m
    """
    from ._parse import is_qty_text, parse_qty, to_unit

    if unit is None:
        # Called with no arguments or one argument.
        if isinstance(value, Quantity):
            return value

        if isinstance(value, str):
            if is_qty_text(value):
                # Case qty('5.0 m'): Complete expression.
                res = parse_qty(value)
                if not isinstance(res, Quantity):
                    res = Quantity(res, get_unit('1'))
                return res

            # Case qty(unit): Assume value = 1.
            return Quantity(1, to_unit(value))

        if isinstance(value, (Unit, UnitFamily)):
            return Quantity(1, value)

        return Quantity(value, get_unit('1'))

    # Called with two arguments.
    if isinstance(value, str):
        # Warn if both value and unit were strings.  This is normally
        # unintentional.
        warnings.warn("qty() received string where a numeric value was "
                      "expected.")

    if isinstance(value, Quantity):
        return value.convert_to(unit)

    return Quantity(value, to_unit(unit))


# == Private Functions =================================================

def _common_cmp(lhs: Quantity, rhs, op: Callable[[Any, Any], bool]):
    """
    Common method used for comparison of a Quantity object and another
    object called by all magic methods.  If ``rhs`` is not a Quantity it
    is promoted to a dimensionless quantity before comparison.
    """
    rhs = _promote(rhs)
    if lhs.unit == rhs.unit:
        return op(lhs.value, rhs.value)
    return op(lhs.value, rhs.value_as(lhs.unit))


def _promote(x) -> Quantity:
    if isinstance(x, Quantity):
        return x
    return Quantity(x, get_unit('1'))


def _value_pow(value, exp):
    """Power of a value with an exact exponent."""
    if exp.denominator == 1:
        return value ** exp.numerator
    return value ** (exp.numerator / exp.denominator)
