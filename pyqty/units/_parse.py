"""
Recursive-descent parser for unit and quantity expressions.

Units are written with the registered unit symbols combined using ``*``
(or ``·``, ``×``) and ``/`` which are left associative, ``^`` for
powers and parentheses for grouping:

>>> print(parse_unit('kg*m/s^2'))
(kg·m)/s²
>>> print(parse_unit('1/(m/s)'))
1/(m/s)

Powers can be integer or rational, with an optional sign, or unicode
superscripts.  A negative power gives the reciprocal of the positive
power, so ``m^-2`` is ``1/m²``.

Quantities are a number followed by a unit.  Several can be summed using
``+`` or ``,``, and the total converted using ``as <type>`` (the base
unit of the type), ``in <unit>`` or simplified with ``-> <type>``.  A
leading ``*`` returns just the value:

>>> print(parse_qty('3.0 km + 500.0 m in m'))
3500.0 m
>>> parse_qty('* 2.0 km in m')
2000.0
"""
from __future__ import annotations

import re
from fractions import Fraction
from functools import lru_cache

from ._base import Unit, UnitInv
from ._concrete import UnitFamily, _KNOWN_UNITS, _UNIT_TYPES
from ._dimension import _UCODE_SS_CHARS, _from_ucode_super
from .exception import UnitDomainError, UnitParseError

# Written by the pyqty developers, 2024.

# ======================================================================


def is_qty_text(text: str) -> bool:
    """
    Returns ``True`` if `text` looks like a quantity expression (i.e.
    starts with a number or ``*``), rather than a unit expression.  A
    leading ``1/`` or a lone ``1`` is taken to be a unit.
    """
    if _UNIT_ONE_RX.match(text):
        return False
    return bool(_QTY_START_RX.match(text))


@lru_cache(maxsize=None)
def parse_unit(text: str) -> Unit:
    """
    Parse a unit expression, e.g. ``'km/h'``, ``'kg*m^2'``,
    ``'(m/s)^(1/2)'``.  Named unit types (e.g. ``'Speed'``) are also
    accepted and give the base template of the type.

    Raises
    ------
    UnitParseError
        If `text` is malformed or uses an unknown symbol.
    UnitDomainError
        If a power of zero or a root of degree zero is given.
    """
    parser = _Parser(text)
    unit = parser.unit()
    parser.end()
    return unit


def parse_qty(text: str):
    """
    Parse a quantity statement, e.g. ``'9.81 m/s^2'``, ``'1.0 km, 20.0 m
    as Length'`` or ``'* 36.0 km/h in m/s'``.  Returns a `Quantity`, or
    a plain value when the statement begins with ``*``.

    Raises
    ------
    UnitParseError
        If `text` is malformed or uses an unknown symbol.
    """
    return _Parser(text).statement()


def to_unit(x) -> Unit:
    """
    Returns `x` as a `Unit`.  `x` can be a `Unit`, a `UnitFamily` (giving
    its base unit) or a string for `parse_unit`.
    """
    if isinstance(x, Unit):
        return x
    if isinstance(x, UnitFamily):
        return x.base
    if isinstance(x, str):
        return parse_unit(x)
    raise TypeError(f"Cannot use {type(x).__name__} as a unit.")


# == Private Attributes & Classes ======================================

_QTY_START_RX = re.compile(r'\s*(?:\*|[+-]?\s*\.?\d)')
_UNIT_ONE_RX = re.compile(r'\s*1\s*(?:/|$)')

_TOKEN_RX = re.compile(fr'''
    (?P<ws>\s+)
    |(?P<num>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)      # Number.
    |(?P<sup>[{_UCODE_SS_CHARS[0]}]+)                       # Pwr (ucode).
    |(?P<op>->|[*·×/^()+,-])                                # Operator.
    |(?P<name>[^\W\d](?:[^\W{_UCODE_SS_CHARS[0]}]|[☉♃🜨])*)  # Symbol.
    |(?P<bad>.)                                             # OR mismatch.
''', flags=re.VERBOSE)

_MUL_OPS = ('*', '·', '×')


class _Parser:
    """Single use parser holding the token stream for one string."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = []  # (kind, value, pos)
        for m in _TOKEN_RX.finditer(text):
            kind = m.lastgroup
            if kind == 'ws':
                continue
            if kind == 'bad':
                self.error(f"Invalid character '{m.group()}'", m.start())
            self.tokens.append((kind, m.group(), m.start()))
        self.idx = 0

    # -- Token Handling -------------------------------------------------

    def end(self):
        if self.idx < len(self.tokens):
            _, value, pos = self.tokens[self.idx]
            self.error(f"Unexpected '{value}'", pos)

    def error(self, msg: str, pos: int = None):
        if pos is None:
            pos = (self.tokens[self.idx][2] if self.idx < len(self.tokens)
                   else len(self.text))
        raise UnitParseError(f"{msg} in '{self.text}' at position {pos}.",
                             text=self.text, pos=pos)

    def expect(self, value: str):
        if self.peek_value() != value:
            self.error(f"Expected '{value}'")
        self.idx += 1

    def next(self) -> tuple[str, str, int]:
        if self.idx >= len(self.tokens):
            self.error("Unexpected end")
        tok = self.tokens[self.idx]
        self.idx += 1
        return tok

    def peek_kind(self, offset: int = 0) -> str | None:
        i = self.idx + offset
        return self.tokens[i][0] if i < len(self.tokens) else None

    def peek_value(self, offset: int = 0) -> str | None:
        i = self.idx + offset
        return self.tokens[i][1] if i < len(self.tokens) else None

    # -- Grammar --------------------------------------------------------

    def statement(self):
        """statement := ['*'] sum [('as' type) | ('in' unit) | ('->'
        type)]"""
        deref = self.peek_value() == '*'
        if deref:
            self.idx += 1

        total = self.sum()
        keyword = self.peek_value()
        if keyword == 'as':
            self.idx += 1
            total = total.convert(self.unit())
        elif keyword == 'in':
            self.idx += 1
            total = total.convert_to(self.unit())
        elif keyword == '->':
            self.idx += 1
            total = total.simplify(self.unit())
        self.end()

        return total.value if deref else total

    def sum(self):
        """sum := literal (('+' | ',') literal)*"""
        total = self.literal()
        while self.peek_value() in ('+', ','):
            self.idx += 1
            total = total + self.literal()
        return total

    def literal(self):
        """literal := signed-float unit"""
        sign = 1
        if self.peek_value() in ('+', '-'):
            sign = -1 if self.next()[1] == '-' else 1

        kind, value, _ = self.next()
        if kind != 'num':
            self.error(f"Expected number, got '{value}'")
        num = float(value)

        return (sign * num) * self.unit()

    def unit(self) -> Unit:
        """unit := term (('*' | '/') term)*"""
        res = self.term()
        while (op := self.peek_value()) in _MUL_OPS or op == '/':
            self.idx += 1
            rhs = self.term()
            res = res / rhs if op == '/' else res * rhs
        return res

    def term(self) -> Unit:
        """term := ['1' '/'] base [power]"""
        recip = False
        if self.peek_value() == '1' and self.peek_value(1) == '/':
            self.idx += 2
            recip = True

        res = self.power(self.base())
        return UnitInv(res) if recip else res

    def base(self) -> Unit:
        """base := symbol | '(' unit ')'"""
        kind, value, pos = self.next()
        if value == '(':
            res = self.unit()
            self.expect(')')
            return res

        if kind == 'name' or value == '1':
            if value in _UNIT_TYPES:
                return _UNIT_TYPES[value]
            try:
                return _KNOWN_UNITS[value]
            except KeyError:
                self.error(f"Unknown unit '{value}'", pos)

        self.error(f"Expected unit, got '{value}'", pos)

    def power(self, base: Unit) -> Unit:
        """power := '^' ['+'|'-'] exponent | superscript"""
        if self.peek_kind() == 'sup':
            _, value, pos = self.next()
            try:
                exp = Fraction(_from_ucode_super(value))
            except ValueError:
                self.error(f"Invalid power '{value}'", pos)
        elif self.peek_value() == '^':
            self.idx += 1
            sign = 1
            if self.peek_value() in ('+', '-'):
                sign = -1 if self.next()[1] == '-' else 1
            exp = sign * self.exponent()
        else:
            return base

        return _apply_power(base, exp)

    def exponent(self) -> Fraction:
        """exponent := integer | '(' ['+'|'-'] integer ['/' integer] ')'"""
        if self.peek_value() != '(':
            return Fraction(self.integer())

        self.idx += 1
        sign = 1
        if self.peek_value() in ('+', '-'):
            sign = -1 if self.next()[1] == '-' else 1
        num = self.integer()
        den = 1
        if self.peek_value() == '/':
            self.idx += 1
            den = self.integer()
        self.expect(')')

        if den == 0:
            raise UnitDomainError("Root of degree zero cannot be defined.")
        return sign * Fraction(num, den)

    def integer(self) -> int:
        kind, value, pos = self.next()
        if kind != 'num' or not value.isdigit():
            self.error(f"Expected integer, got '{value}'", pos)
        return int(value)


# == Private Functions =================================================

def _apply_power(base: Unit, exp: Fraction) -> Unit:
    """
    Raise `base` to `exp`, with negative powers giving the reciprocal
    of the positive power.
    """
    if exp == 0:
        raise UnitDomainError(f"Unit '{base}' with exponent of zero is "
                              f"scalar.")
    if exp < 0:
        return UnitInv(base.pow(-exp))
    return base.pow(exp)

