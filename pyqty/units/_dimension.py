"""
Dimension vectors: the exponents of the seven base physical quantities
underlying every unit.  Two units are interconvertible if (and only if)
their dimensions are equal.
"""
from __future__ import annotations

from collections import namedtuple
from fractions import Fraction
from numbers import Rational

from ._opts import get_unit_options

# Written by the pyqty developers, 2024.

# ======================================================================

_BASE_NAMES = ('L', 'M', 'T', 'I', 'Θ', 'N', 'J')


class Dimension(namedtuple('Dimension', _BASE_NAMES,
                           defaults=[Fraction(0)] * 7)):
    """
    ``Dimension`` is an immutable vector of exact rational exponents
    over the seven base quantities.

    Field names in order:
        - L:  Length.
        - M:  Mass.
        - T:  Time.
        - I:  Electric current.
        - Θ:  Temperature.
        - N:  Amount of substance.
        - J:  Luminous intensity.

    Multiplying units adds dimensions, dividing subtracts them, and
    raising to a power scales them.  The usual operators are provided
    for these (``*``, ``/``, ``**``) as well as the explicitly named
    methods.

    >>> length, time = Dimension(L=1), Dimension(T=1)
    >>> print(length / time / time)
    L·T⁻²
    >>> (length ** 2).L
    Fraction(2, 1)

    .. note:: Because ``Dimension`` is a tuple, ``+`` is *not* tuple
       concatenation; it is redefined to mean `add` (which models
       multiplication of the underlying units).
    """

    def __new__(cls, *args, **kwargs) -> Dimension:
        res = super().__new__(cls, *args, **kwargs)
        # Normalise every exponent to an exact Fraction.
        return super().__new__(cls, *(_to_exp(x) for x in res))

    # -- Group Operations -----------------------------------------------

    def add(self, rhs: Dimension) -> Dimension:
        """Elementwise sum, modelling unit multiplication."""
        return Dimension(*(a + b for a, b in zip(self, rhs)))

    def sub(self, rhs: Dimension) -> Dimension:
        """Elementwise difference, modelling unit division."""
        return Dimension(*(a - b for a, b in zip(self, rhs)))

    def negate(self) -> Dimension:
        """Elementwise negation, modelling the unit reciprocal."""
        return Dimension(*(-a for a in self))

    def scale_by(self, k) -> Dimension:
        """
        Elementwise multiplication by rational `k`, modelling a unit
        raised to a power (fractional `k` gives roots).
        """
        k = _to_exp(k)
        return Dimension(*(a * k for a in self))

    # -- Operators ------------------------------------------------------

    def __add__(self, rhs: Dimension) -> Dimension:
        return self.add(rhs)

    def __sub__(self, rhs: Dimension) -> Dimension:
        return self.sub(rhs)

    def __mul__(self, rhs: Dimension) -> Dimension:
        if not isinstance(rhs, Dimension):
            return NotImplemented
        return self.add(rhs)

    def __truediv__(self, rhs: Dimension) -> Dimension:
        if not isinstance(rhs, Dimension):
            return NotImplemented
        return self.sub(rhs)

    def __neg__(self) -> Dimension:
        return self.negate()

    def __pow__(self, k) -> Dimension:
        return self.scale_by(k)

    def inv(self) -> Dimension:
        """Same as `negate`."""
        return self.negate()

    # -- Other Methods --------------------------------------------------

    def is_dimless(self) -> bool:
        """Return ``True`` if all exponents are zero."""
        return not any(self)

    def __str__(self) -> str:
        parts = [_base_str(name, exp) for name, exp in zip(self._fields, self)
                 if exp != 0]
        return '·'.join(parts) if parts else '1'

    def __repr__(self) -> str:
        args = ', '.join(f"{name}={_exp_str(exp)}" for name, exp in
                         zip(self._fields, self) if exp != 0)
        return f"Dimension({args})"


# == Private Attributes & Functions ====================================

_UCODE_SS_CHARS = ('⁺⁻ᐧ⁰¹²³⁴⁵⁶⁷⁸⁹', '+-.0123456789')


def _to_exp(x) -> Fraction:
    """
    Convert `x` to an exact `Fraction` exponent.  Floats are converted
    via their shortest string form so that e.g. ``0.5`` becomes exactly
    ``1/2`` rather than a binary approximation.
    """
    if isinstance(x, Fraction):
        return x
    if isinstance(x, (int, Rational)):
        return Fraction(x)
    if isinstance(x, float):
        return Fraction(str(x))
    if isinstance(x, str):
        return Fraction(x)
    raise TypeError(f"Invalid exponent type: {type(x).__name__}.")


def _exp_str(exp: Fraction) -> str:
    """Plain string for an exponent, e.g. '2', '-1', '(1/2)'."""
    if exp.denominator == 1:
        return str(exp.numerator)
    return f"({exp.numerator}/{exp.denominator})"


def _pow_str(exp: Fraction) -> str:
    """
    Suffix representing a power, e.g. '²' or '^2', '^(1/2)'.  Unity
    gives an empty string.
    """
    if exp == 1:
        return ''
    if exp.denominator == 1 and get_unit_options().unicode_str:
        return _to_ucode_super(str(exp.numerator))
    return '^' + _exp_str(exp)


def _base_str(name: str, exp: Fraction) -> str:
    return name + _pow_str(exp)


def _from_ucode_super(ss: str) -> str:
    """
    Convert any unicode numeric superscipt characters in the string
    ``ss`` to normal ascii text.
    """
    result = ''
    for c in ss:
        idx = _UCODE_SS_CHARS[0].find(c)
        if idx >= 0:
            result += _UCODE_SS_CHARS[1][idx]
        else:
            result += c
    return result


def _to_ucode_super(ss: str) -> str:
    """
    Convert numeric characters in the string ``ss`` to unicode
    superscript.
    """
    result = ''
    for c in ss:
        idx = _UCODE_SS_CHARS[1].find(c)
        if idx >= 0:
            result += _UCODE_SS_CHARS[0][idx]
        else:
            result += c
    return result


# == Dimension Constants =============================================

DIMLESS = Dimension()
LENGTH = Dimension(L=1)
MASS = Dimension(M=1)
TIME = Dimension(T=1)
CURRENT = Dimension(I=1)
TEMP = Dimension(Θ=1)
AMOUNT = Dimension(N=1)
INTENSITY = Dimension(J=1)

FREQUENCY = TIME.inv()
VELOCITY = LENGTH / TIME
ACCEL = VELOCITY / TIME
FORCE = MASS * ACCEL
AREA = LENGTH ** 2
VOLUME = LENGTH ** 3
DENSITY = MASS / VOLUME
PRESSURE = FORCE / AREA
ENERGY = FORCE * LENGTH
POWER = ENERGY / TIME
CHARGE = CURRENT * TIME
VOLTAGE = POWER / CURRENT
RESISTANCE = VOLTAGE / CURRENT
