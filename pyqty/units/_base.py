"""
Unit expression trees.  Every unit is either a concrete (leaf) unit or
one of a small closed set of compound nodes: product, quotient,
reciprocal and power.  Dimension and scale are computed structurally,
bottom-up, from the leaves.
"""
from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Iterator, Optional

from ._dimension import Dimension, _to_exp, _pow_str
from ._opts import get_unit_options
from .exception import UnitDomainError

# Written by the pyqty developers, 2024.

# ======================================================================


class Unit:
    """
    Abstract base for all units.  A unit has a `dimension`, a `scale`
    relative to the coherent SI unit of that dimension, and a `shape`
    (its expression tree with variants erased).

    Units combine with the normal operators, building a larger tree
    without any simplification:

        - ``a * b`` -> `UnitMul`
        - ``a / b`` -> `UnitDiv`
        - ``1 / a`` -> `UnitInv`
        - ``a ** e`` -> `UnitPow`

    Multiplying (or dividing) a plain number by a unit gives a
    `Quantity`, e.g. ``2.0 * km``.
    """
    __slots__ = ()

    # numpy defers to the reflected operators, so ``array * km`` gives
    # a single array valued Quantity.
    __array_ufunc__ = None

    # -- Abstract Methods -----------------------------------------------

    def base(self) -> Unit:
        """Return the unit of the same shape with every leaf at its base
        (scale = 1) variant."""
        raise NotImplementedError

    def dimension(self) -> Dimension:
        raise NotImplementedError

    def leaves(self) -> Iterator[Unit]:
        """Iterate over the concrete units in this tree, left to right."""
        raise NotImplementedError

    def scale(self) -> float:
        """Magnitude relative to the coherent SI unit of the dimension."""
        raise NotImplementedError

    def shape(self) -> tuple:
        """
        Hashable structural key for this unit.  Two units have the same
        shape if their trees have identical nesting, exponents and leaf
        families (the chosen variants may differ).
        """
        raise NotImplementedError

    def step_down(self) -> Optional[Unit]:
        """
        Return a unit of the same shape with a strictly smaller scale,
        or ``None`` if this cannot be done.  Never returns `self`.
        """
        raise NotImplementedError

    def step_up(self) -> Optional[Unit]:
        """
        Return a unit of the same shape with a strictly larger scale,
        or ``None`` if this cannot be done.  Never returns `self`.
        """
        raise NotImplementedError

    def _str(self, nested: bool) -> str:
        raise NotImplementedError

    # -- Stepping -------------------------------------------------------

    def step_to_bottom(self) -> Unit:
        """Find the smallest unit of this shape by repeated stepping."""
        unit = self
        while (step := unit.step_down()) is not None:
            unit = step
        return unit

    def step_to_top(self) -> Unit:
        """Find the largest unit of this shape by repeated stepping."""
        unit = self
        while (step := unit.step_up()) is not None:
            unit = step
        return unit

    # -- Comparison -----------------------------------------------------

    def is_dimless(self) -> bool:
        return self.dimension().is_dimless()

    def same_dimension(self, other: Unit) -> bool:
        return self.dimension() == other.dimension()

    def same_shape(self, other: Unit) -> bool:
        return self.shape() == other.shape()

    def scale_factor(self, target: Unit) -> float:
        """
        Return the multiplication factor needed to rescale a value from
        this unit to `target`, which must have the same dimension.  See
        `conversion_factor`.
        """
        from ._convert import conversion_factor
        return conversion_factor(self, target)

    # -- Construction ---------------------------------------------------

    def __mul__(self, rhs):
        if isinstance(rhs, Unit):
            return UnitMul(self, rhs)
        return NotImplemented

    def __rmul__(self, lhs):
        # Number * unit gives a quantity.
        if _is_value(lhs):
            return self.quantity(lhs)
        return NotImplemented

    def __truediv__(self, rhs):
        if isinstance(rhs, Unit):
            return UnitDiv(self, rhs)
        return NotImplemented

    def __rtruediv__(self, lhs):
        if isinstance(lhs, int) and not isinstance(lhs, bool) and lhs == 1:
            return UnitInv(self)
        if _is_value(lhs):
            return UnitInv(self).quantity(lhs)
        return NotImplemented

    def __pow__(self, exp):
        return self.pow(exp)

    def inv(self) -> Unit:
        """Return the reciprocal ``1/self``."""
        return UnitInv(self)

    def pow(self, exp) -> Unit:
        """
        Raise to a (possibly rational) power.  A power of one returns
        this unit unchanged.

        Raises
        ------
        UnitDomainError
            If `exp` is zero (the result would be a plain scalar).
        """
        if isinstance(exp, ExpVar):
            return UnitPow(self, exp)
        exp = _to_exp(exp)
        if exp == 0:
            raise UnitDomainError(f"Unit '{self}' with exponent of zero is "
                                  f"scalar.")
        if exp == 1:
            return self
        return UnitPow(self, exp)

    def root(self, degree: int) -> Unit:
        """
        Take the root of integer `degree`.

        Raises
        ------
        UnitDomainError
            If `degree` is zero.
        """
        if degree == 0:
            raise UnitDomainError("Root of degree zero cannot be defined.")
        return self.pow(Fraction(1, degree))

    def squared(self) -> Unit:
        return self.pow(2)

    def cubed(self) -> Unit:
        return self.pow(3)

    def sqrt(self) -> Unit:
        return self.root(2)

    def cbrt(self) -> Unit:
        return self.root(3)

    # -- Quantity Creation ----------------------------------------------

    def quantity(self, value):
        """Return a `Quantity` with this unit and the given value."""
        from ._qty import Quantity
        return Quantity(value, self)

    def one(self):
        """Return a `Quantity` with this unit and a value of one."""
        return self.quantity(1.0)

    def zero(self):
        """Return a `Quantity` with this unit and a value of zero."""
        return self.quantity(0.0)

    # -- String Methods -------------------------------------------------

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __str__(self) -> str:
        return self._str(nested=False)


# ----------------------------------------------------------------------

@dataclass(frozen=True)
class ExpVar:
    """
    A named placeholder for an exponent, used only when writing
    simplification patterns such as ``A ** n * B ** n``.
    """
    name: str

    def __str__(self) -> str:
        return self.name


# ----------------------------------------------------------------------

@dataclass(frozen=True, repr=False)
class UnitMul(Unit):
    """One unit multiplied by another; for example, Newton Meters."""
    lhs: Unit
    rhs: Unit

    def base(self) -> UnitMul:
        return UnitMul(self.lhs.base(), self.rhs.base())

    def dimension(self) -> Dimension:
        return self.lhs.dimension().add(self.rhs.dimension())

    def leaves(self) -> Iterator[Unit]:
        yield from self.lhs.leaves()
        yield from self.rhs.leaves()

    def scale(self) -> float:
        return self.lhs.scale() * self.rhs.scale()

    def shape(self) -> tuple:
        return '*', self.lhs.shape(), self.rhs.shape()

    def step_down(self) -> Optional[UnitMul]:
        return _pick(_step(self.lhs.step_down(), lambda u: UnitMul(u, self.rhs)),
                     _step(self.rhs.step_down(), lambda u: UnitMul(self.lhs, u)),
                     lower=True)

    def step_up(self) -> Optional[UnitMul]:
        return _pick(_step(self.lhs.step_up(), lambda u: UnitMul(u, self.rhs)),
                     _step(self.rhs.step_up(), lambda u: UnitMul(self.lhs, u)),
                     lower=False)

    def _str(self, nested: bool) -> str:
        sep = '·' if get_unit_options().unicode_str else '*'
        res = self.lhs._str(True) + sep + self.rhs._str(True)
        return f"({res})" if nested else res

    def __repr__(self) -> str:
        return f"UnitMul({self.lhs!r}, {self.rhs!r})"


@dataclass(frozen=True, repr=False)
class UnitDiv(Unit):
    """One unit divided by another; for example, Meters per Second."""
    lhs: Unit
    rhs: Unit

    @property
    def numerator(self) -> Unit:
        return self.lhs

    @property
    def denominator(self) -> Unit:
        return self.rhs

    def base(self) -> UnitDiv:
        return UnitDiv(self.lhs.base(), self.rhs.base())

    def dimension(self) -> Dimension:
        return self.lhs.dimension().sub(self.rhs.dimension())

    def leaves(self) -> Iterator[Unit]:
        yield from self.lhs.leaves()
        yield from self.rhs.leaves()

    def scale(self) -> float:
        return self.lhs.scale() / self.rhs.scale()

    def shape(self) -> tuple:
        return '/', self.lhs.shape(), self.rhs.shape()

    def step_down(self) -> Optional[UnitDiv]:
        # Smaller numerator or larger denominator.
        return _pick(_step(self.lhs.step_down(), lambda u: UnitDiv(u, self.rhs)),
                     _step(self.rhs.step_up(), lambda u: UnitDiv(self.lhs, u)),
                     lower=True)

    def step_up(self) -> Optional[UnitDiv]:
        return _pick(_step(self.lhs.step_up(), lambda u: UnitDiv(u, self.rhs)),
                     _step(self.rhs.step_down(), lambda u: UnitDiv(self.lhs, u)),
                     lower=False)

    def _str(self, nested: bool) -> str:
        res = self.lhs._str(True) + '/' + self.rhs._str(True)
        return f"({res})" if nested else res

    def __repr__(self) -> str:
        return f"UnitDiv({self.lhs!r}, {self.rhs!r})"


@dataclass(frozen=True, repr=False)
class UnitInv(Unit):
    """The reciprocal of a unit; for example, per Second."""
    inner: Unit

    def base(self) -> UnitInv:
        return UnitInv(self.inner.base())

    def dimension(self) -> Dimension:
        return self.inner.dimension().negate()

    def leaves(self) -> Iterator[Unit]:
        yield from self.inner.leaves()

    def scale(self) -> float:
        return 1.0 / self.inner.scale()

    def shape(self) -> tuple:
        return '1/', self.inner.shape()

    def step_down(self) -> Optional[UnitInv]:
        return _step(self.inner.step_up(), UnitInv)

    def step_up(self) -> Optional[UnitInv]:
        return _step(self.inner.step_down(), UnitInv)

    def _str(self, nested: bool) -> str:
        res = '1/' + self.inner._str(True)
        return f"({res})" if nested else res

    def __repr__(self) -> str:
        return f"UnitInv({self.inner!r})"


@dataclass(frozen=True, repr=False)
class UnitPow(Unit):
    """
    A unit raised to a rational power, e.g. ``m²`` or ``m^(1/2)``.
    Powers of powers fold together, so ``(m ** 2).sqrt()`` gives back
    exactly ``m``.
    """
    inner: Unit
    exp: Fraction | ExpVar

    def base(self) -> UnitPow:
        return UnitPow(self.inner.base(), self.exp)

    def dimension(self) -> Dimension:
        return self.inner.dimension().scale_by(self.exp)

    def leaves(self) -> Iterator[Unit]:
        yield from self.inner.leaves()

    def pow(self, exp) -> Unit:
        """(u^p)^q = u^(pq)"""
        if isinstance(exp, ExpVar) or isinstance(self.exp, ExpVar):
            return super().pow(exp)
        return self.inner.pow(self.exp * _to_exp(exp))

    def scale(self) -> float:
        base = self.inner.scale()
        if self.exp.denominator == 1:
            return base ** self.exp.numerator
        return base ** (self.exp.numerator / self.exp.denominator)

    def shape(self) -> tuple:
        return '^', self.inner.shape(), self.exp

    def step_down(self) -> Optional[UnitPow]:
        step = self.inner.step_down() if self.exp > 0 else self.inner.step_up()
        return _step(step, lambda u: UnitPow(u, self.exp))

    def step_up(self) -> Optional[UnitPow]:
        step = self.inner.step_up() if self.exp > 0 else self.inner.step_down()
        return _step(step, lambda u: UnitPow(u, self.exp))

    def _str(self, nested: bool) -> str:
        if isinstance(self.exp, ExpVar):
            return f"{self.inner._str(True)}^{self.exp}"
        return self.inner._str(True) + _pow_str(self.exp)

    def __repr__(self) -> str:
        return f"UnitPow({self.inner!r}, {self.exp!r})"


# == Private Functions =================================================

def _is_value(x) -> bool:
    """True if `x` looks like a plain numeric value (or array)."""
    from numbers import Number
    import numpy as np
    return isinstance(x, (Number, np.ndarray)) and not isinstance(x, bool)


def _pick(a: Optional[Unit], b: Optional[Unit], lower: bool) -> Optional[Unit]:
    """
    Choose between two candidate steps.  Where both exist, take the one
    nearest the current scale, i.e. the larger resulting scale when
    stepping down (`lower` = ``True``) or the smaller when stepping up.
    Ties go to `a` (the left operand).
    """
    if a is None:
        return b
    if b is None:
        return a
    if lower:
        return a if a.scale() >= b.scale() else b
    return a if a.scale() <= b.scale() else b


def _step(unit: Optional[Unit], wrap) -> Optional[Unit]:
    return None if unit is None else wrap(unit)
