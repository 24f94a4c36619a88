"""
Shape-changing rewrites of unit expressions.

Arithmetic builds units structurally, so dividing a length by a time
gives ``UnitDiv(Length, Time)`` and multiplying that by a time gives
``UnitMul(UnitDiv(Length, Time), Time)`` rather than just a length.  The
functions here move a unit between equivalent shapes using a fixed
catalogue of rewrite rules, each written as a pair of patterns:

>>> from pyqty.units import UnitVar
>>> A, B = UnitVar('A'), UnitVar('B')
>>> print(Rule('cancel', (A / B) * B, A))
cancel: (A/B)·B -> A

Applying a rule also gives the exact scalar factor for the value.  When
each pattern variable appears once on each side the rule is a pure
rearrangement and the factor is exactly one.  Otherwise (e.g.
cancellation of ``B`` between variants ``h`` and ``s``) the factor is
computed from the scales of the units bound to the patterns.

Rules are never chained automatically.  A simplification either
succeeds using the first registered rule giving the requested shape, or
raises `SimplifyError`.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ._base import Unit, UnitMul, UnitDiv, UnitInv, UnitPow, ExpVar
from ._concrete import ConcreteUnit
from ._convert import Conversion
from ._opts import get_unit_options
from .exception import SimplifyError

# Written by the pyqty developers, 2024.

# ======================================================================


@dataclass(frozen=True, repr=False)
class UnitVar(Unit):
    """
    A named placeholder that matches any unit in a rewrite pattern.
    Where the same variable appears more than once in a source pattern,
    every occurrence must match units of the same shape; the first
    occurrence supplies the unit used in the result.
    """
    name: str

    def _str(self, nested: bool) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"UnitVar('{self.name}')"


# ----------------------------------------------------------------------

@dataclass(frozen=True)
class Rule:
    """
    A single rewrite `source` -> `target` between two patterns built
    from `UnitVar`, `ExpVar` and the normal unit operators.
    """
    name: str
    source: Unit
    target: Unit
    pure: bool = field(init=False)

    def __post_init__(self):
        src_vars = Counter(_unit_vars(self.source))
        tgt_vars = Counter(_unit_vars(self.target))
        if not set(tgt_vars) <= set(src_vars):
            raise ValueError(f"Rule '{self.name}' target uses variables "
                             f"not in source.")
        if not set(_exp_vars(self.target)) <= set(_exp_vars(self.source)):
            raise ValueError(f"Rule '{self.name}' target uses exponents "
                             f"not in source.")

        # A pure rearrangement moves each sub-unit exactly once.
        pure = (set(src_vars) == set(tgt_vars) and
                all(n == 1 for n in src_vars.values()) and
                all(n == 1 for n in tgt_vars.values()))
        object.__setattr__(self, 'pure', pure)

    def apply(self, unit: Unit) -> Optional[Conversion]:
        """
        Attempt to rewrite `unit`.  Returns ``None`` if the source
        pattern does not match, otherwise the `Conversion` to the
        rewritten unit.
        """
        binds = {}
        if not _match(self.source, unit, binds):
            return None

        result = _build(self.target, binds)
        if self.pure:
            return Conversion(result, 1.0)
        return Conversion(result, unit.scale() / result.scale())

    def __str__(self) -> str:
        return f"{self.name}: {self.source} -> {self.target}"


# ----------------------------------------------------------------------

def add_rule(source: Unit, target: Unit, *, name: str,
             bidirectional: bool = True) -> list[Rule]:
    """
    Register a new rewrite rule (and its reverse, if `bidirectional`).
    Rules are tried in order of registration.

    Parameters
    ----------
    source, target : Unit
        Patterns, e.g. ``A / (1 / B)`` and ``A * B``.
    name : str
        Descriptive name.  The reverse rule is named ``name + ' (rev)'``.
    bidirectional : bool, default = True
        Also register ``target -> source``.

    Returns
    -------
    list[Rule]
        The rule(s) added.

    Raises
    ------
    ValueError
        If the target of either rule uses a variable that does not
        appear in its source.
    """
    new = [Rule(name, source, target)]
    if bidirectional:
        new.append(Rule(name + ' (rev)', target, source))

    _RULES.extend(new)
    _RULE_CACHE.clear()
    return new


def rules() -> list[Rule]:
    """Return the list of registered rules in order."""
    return list(_RULES)


def rewrites(unit: Unit) -> list[tuple[str, Conversion]]:
    """
    Enumerate every single-step rewrite available for `unit`, as a list
    of ``(rule name, conversion)`` pairs.  Useful for discovering which
    shapes a unit can be simplified into.
    """
    res = []
    for rule in _RULES:
        if (conv := rule.apply(unit)) is not None:
            res.append((rule.name, conv))
    return res


def simplify(unit: Unit, target) -> Conversion:
    """
    Find the conversion of `unit` to a unit with the same shape as
    `target`, using a single registered rule.

    >>> from pyqty.units import parse_unit
    >>> conv = simplify(parse_unit('(km/h)*s'), parse_unit('m'))
    >>> print(conv.target, f"{conv.factor:.6f}")
    km 0.000278

    Parameters
    ----------
    unit : Unit
        Unit to be rewritten.
    target : Unit, UnitFamily or str
        Any unit with the required shape, e.g. ``Length / Time``.  Only
        the shape is used, the variants of the result come from `unit`.

    Returns
    -------
    Conversion
        Rewritten unit and the factor to apply to values.  Where `unit`
        already has the target shape this is `unit` itself with a factor
        of one.

    Raises
    ------
    SimplifyError
        If no registered rule rewrites `unit` into the target shape.
    """
    from ._parse import to_unit

    target = to_unit(target)
    target_shape = target.shape()
    source_shape = unit.shape()
    if source_shape == target_shape:
        return Conversion(unit, 1.0)

    use_cache = get_unit_options().cache_simplify
    key = (source_shape, target_shape)
    if use_cache and key in _RULE_CACHE:
        return _RULE_CACHE[key].apply(unit)

    for rule in _RULES:
        conv = rule.apply(unit)
        if conv is not None and conv.target.shape() == target_shape:
            if use_cache:
                _RULE_CACHE[key] = rule
            return conv

    raise SimplifyError(
        f"No known simplification path from '{unit}' (shape "
        f"'{unit.base()}') to shape '{target.base()}'.",
        source=unit, target=target)


def simplify_left(unit: Unit, target) -> Conversion:
    """
    As for `simplify`, but only the left operand of a product or
    quotient is rewritten; the right operand is unchanged.
    """
    if not isinstance(unit, (UnitMul, UnitDiv)):
        raise SimplifyError(f"Unit '{unit}' has no left operand.",
                            source=unit)

    conv = simplify(unit.lhs, target)
    return Conversion(type(unit)(conv.target, unit.rhs), conv.factor)


def simplify_right(unit: Unit, target) -> Conversion:
    """
    As for `simplify`, but only the right operand of a product or
    quotient is rewritten; the left operand is unchanged.
    """
    if not isinstance(unit, (UnitMul, UnitDiv)):
        raise SimplifyError(f"Unit '{unit}' has no right operand.",
                            source=unit)

    conv = simplify(unit.rhs, target)
    factor = conv.factor
    if isinstance(unit, UnitDiv):
        factor = 1.0 / factor  # Denominator.
    return Conversion(type(unit)(unit.lhs, conv.target), factor)


# == Private Functions =================================================

def _build(pattern: Unit, binds: dict) -> Unit:
    """Substitute bound units and exponents into `pattern`."""
    if isinstance(pattern, UnitVar):
        return binds[pattern.name]
    if isinstance(pattern, UnitMul):
        return UnitMul(_build(pattern.lhs, binds), _build(pattern.rhs, binds))
    if isinstance(pattern, UnitDiv):
        return UnitDiv(_build(pattern.lhs, binds), _build(pattern.rhs, binds))
    if isinstance(pattern, UnitInv):
        return UnitInv(_build(pattern.inner, binds))
    if isinstance(pattern, UnitPow):
        exp = pattern.exp
        if isinstance(exp, ExpVar):
            exp = binds[exp]
        return UnitPow(_build(pattern.inner, binds), exp)
    return pattern


def _exp_vars(pattern: Unit) -> Iterator[ExpVar]:
    if isinstance(pattern, (UnitMul, UnitDiv)):
        yield from _exp_vars(pattern.lhs)
        yield from _exp_vars(pattern.rhs)
    elif isinstance(pattern, UnitInv):
        yield from _exp_vars(pattern.inner)
    elif isinstance(pattern, UnitPow):
        if isinstance(pattern.exp, ExpVar):
            yield pattern.exp
        yield from _exp_vars(pattern.inner)


def _match(pattern: Unit, unit: Unit, binds: dict) -> bool:
    """
    Match `unit` against `pattern`, adding to `binds` (variable name ->
    unit, `ExpVar` -> exponent).
    """
    if isinstance(pattern, UnitVar):
        bound = binds.get(pattern.name)
        if bound is None:
            binds[pattern.name] = unit
            return True
        return bound.shape() == unit.shape()

    if isinstance(pattern, ConcreteUnit):
        return pattern.shape() == unit.shape()

    if type(pattern) is not type(unit):
        return False

    if isinstance(pattern, (UnitMul, UnitDiv)):
        return (_match(pattern.lhs, unit.lhs, binds) and
                _match(pattern.rhs, unit.rhs, binds))

    if isinstance(pattern, UnitInv):
        return _match(pattern.inner, unit.inner, binds)

    if isinstance(pattern, UnitPow):
        if isinstance(pattern.exp, ExpVar):
            if binds.setdefault(pattern.exp, unit.exp) != unit.exp:
                return False
        elif pattern.exp != unit.exp:
            return False
        return _match(pattern.inner, unit.inner, binds)

    return False


def _unit_vars(pattern: Unit) -> Iterator[str]:
    if isinstance(pattern, UnitVar):
        yield pattern.name
    elif isinstance(pattern, (UnitMul, UnitDiv)):
        yield from _unit_vars(pattern.lhs)
        yield from _unit_vars(pattern.rhs)
    elif isinstance(pattern, (UnitInv, UnitPow)):
        yield from _unit_vars(pattern.inner)


# == Rule Catalogue ====================================================

_RULES: list[Rule] = []
_RULE_CACHE: dict[tuple, Rule] = {}

A, B, C, D = UnitVar('A'), UnitVar('B'), UnitVar('C'), UnitVar('D')
n = ExpVar('n')

# -- Reciprocals -------------------------------------------------------

add_rule(1 / (1 / A), A, name='double reciprocal')
add_rule(1 / (A / B), B / A, name='reciprocal of quotient')
add_rule(A ** -1, 1 / A, name='negative power')
add_rule((1 / A) * (1 / B), 1 / (A * B), name='product of reciprocals')

# -- Commutativity -----------------------------------------------------

add_rule(A * B, B * A, name='commute', bidirectional=False)

# -- Fractions ---------------------------------------------------------

add_rule(A * (1 / B), A / B, name='multiply by reciprocal')
add_rule((1 / B) * A, A / B, name='reciprocal times')
add_rule(A / (1 / B), A * B, name='divide by reciprocal')

add_rule(A / (B / C), (A * C) / B, name='divide by fraction')
add_rule(A / (B / C), A * (C / B), name='multiply by inverse fraction')
add_rule((A * C) / B, A * (C / B), name='factor numerator')
add_rule(A * (B / C), A / (C / B), name='multiply by fraction')
add_rule((A / C) * (B / D), (A * B) / (C * D), name='product of fractions')
add_rule((A / C) / (B / D), (A * D) / (C * B), name='quotient of fractions')

# -- Powers ------------------------------------------------------------

add_rule(A ** n * B ** n, (A * B) ** n, name='power of product')
add_rule(A ** n / B ** n, (A / B) ** n, name='power of quotient')

add_rule(A * A, A ** 2, name='square', bidirectional=False)
add_rule(A ** 2 * A, A ** 3, name='cube', bidirectional=False)
add_rule(A ** 3 / A, A ** 2, name='reduce cube', bidirectional=False)
add_rule(A ** 2 / A, A, name='reduce square', bidirectional=False)

# -- Cancellation ------------------------------------------------------

add_rule((A / B) * B, A, name='cancel denominator', bidirectional=False)
add_rule(B * (A / B), A, name='cancel denominator (lhs)',
         bidirectional=False)
add_rule((A * B) / B, A, name='cancel right factor', bidirectional=False)
add_rule((A * B) / A, B, name='cancel left factor', bidirectional=False)

# -- Associativity -----------------------------------------------------

add_rule((A * B) * C, A * (B * C), name='associate product')
add_rule((A / B) / C, A / (B * C), name='associate quotient')
# Note: (A*B)/C <-> A*(B/C) is 'factor numerator', above.

del A, B, C, D, n
