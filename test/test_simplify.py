from fractions import Fraction

import pytest

from pyqty.units import (ExpVar, Rule, SimplifyError, UnitMul, UnitVar,
                         add_rule, get_unit, parse_unit, qty, rewrites, rules,
                         simplify, simplify_left, simplify_right, unit_options)
from pyqty.units._simplify import _RULES, _RULE_CACHE, _build


# Written by the pyqty developers, 2024.

# ======================================================================

def _bidirectional_pairs() -> list[tuple[Rule, Rule]]:
    by_name = {r.name: r for r in rules()}
    return [(r, by_name[r.name + ' (rev)']) for r in rules()
            if r.name + ' (rev)' in by_name]


_BIDIRECTIONAL = _bidirectional_pairs()

# Variable bindings used to build sample units from rule patterns, using
# non-base variants so that any scale error would show.
_BINDINGS = [
    {'A': get_unit('km'), 'B': get_unit('h'), 'C': get_unit('g'),
     'D': get_unit('ms'), ExpVar('n'): Fraction(2)},
    {'A': parse_unit('km/h'), 'B': get_unit('mm'), 'C': parse_unit('1/min'),
     'D': parse_unit('kg*ft'), ExpVar('n'): Fraction(1, 2)},
]


# ----------------------------------------------------------------------

def test_catalogue_present():
    names = {r.name for r in rules()}
    for name in ('double reciprocal', 'reciprocal of quotient',
                 'negative power', 'commute', 'multiply by reciprocal',
                 'divide by reciprocal', 'divide by fraction',
                 'product of fractions', 'power of product', 'square',
                 'cube', 'reduce cube', 'reduce square',
                 'cancel denominator', 'cancel denominator (lhs)',
                 'cancel right factor', 'associate product'):
        assert name in names

    # One-way rules.
    for name in ('commute', 'square', 'cancel denominator'):
        assert name + ' (rev)' not in names


@pytest.mark.parametrize("binds", _BINDINGS, ids=['leaves', 'compound'])
@pytest.mark.parametrize("fwd, rev", _BIDIRECTIONAL,
                         ids=[r.name for r, _ in _BIDIRECTIONAL])
def test_bidirectional_round_trip(fwd: Rule, rev: Rule, binds: dict):
    """
    Applying a bidirectional rule forward then backward gives back the
    original unit and an overall factor of one.
    """
    unit = _build(fwd.source, binds)
    conv = fwd.apply(unit)
    assert conv is not None
    assert conv.target.dimension() == unit.dimension()
    assert conv.target.scale() * conv.factor == pytest.approx(unit.scale())

    back = rev.apply(conv.target)
    assert back is not None
    assert back.target == unit
    assert conv.factor * back.factor == pytest.approx(1.0)


def test_pure_rules():
    A, B = UnitVar('A'), UnitVar('B')
    assert Rule('swap', A * B, B * A).pure
    assert not Rule('cancel', (A / B) * B, A).pure
    assert not Rule('square', A * A, A ** 2).pure

    with pytest.raises(ValueError):
        Rule('bad', A, A * B)

    n = ExpVar('n')
    with pytest.raises(ValueError):
        Rule('bad', A, A ** n)


def test_rule_str():
    A, B = UnitVar('A'), UnitVar('B')
    assert str(Rule('cancel', (A / B) * B, A)) == 'cancel: (A/B)·B -> A'


def test_identity():
    unit = parse_unit('km/h')
    conv = simplify(unit, 'm/s')
    assert conv.target is unit
    assert conv.factor == 1.0


def test_cancellation_factor():
    conv = simplify(parse_unit('(km/h)*s'), 'Length')
    assert conv.target is get_unit('km')
    assert conv.factor == pytest.approx(1 / 3600)

    # Same rule for different variants gives the correct factor.
    conv = simplify(parse_unit('(m/s)*h'), 'Length')
    assert conv.target is get_unit('m')
    assert conv.factor == pytest.approx(3600.0)

    q = qty(90.0, 'km/h') * qty(2.0, 'h')
    assert q.simplify('Length').value == pytest.approx(180.0)
    assert q.simplify('Length').unit is get_unit('km')


@pytest.mark.parametrize("source, target, expected, factor", [
    ('km*m', 'm^2', 'km²', 1e-3),
    ('m^2*m', 'm^3', 'm³', 1.0),
    ('km^3/m', 'm^2', 'km²', 1e3),
    ('s^2/ms', 's', 's', 1e3),
    ('(km*h)/s', 'm', 'km', 3600.0),
    ('(km*h)/km', 's', 'h', 1.0),
    ('m*s', 's*m', 's·m', 1.0),
    ('m/(1/s)', 'm*s', 'm·s', 1.0),
    ('1/(m/s)', 's/m', 's/m', 1.0),
    ('(m/s)/s', 'm/(s*s)', 'm/(s·s)', 1.0),
    ('(m/s)*(kg/h)', '(m*kg)/(s*h)', '(m·kg)/(s·h)', 1.0),
    ('m^2*s^2', '(m*s)^2', '(m·s)²', 1.0),
])
def test_simplify(source: str, target: str, expected: str, factor: float):
    conv = simplify(parse_unit(source), target)
    assert str(conv.target) == expected
    assert conv.factor == pytest.approx(factor)
    assert conv.target.dimension() == parse_unit(source).dimension()


def test_no_path():
    unit = parse_unit('(m/s)/s')
    with pytest.raises(SimplifyError) as exc_info:
        simplify(unit, 'm*s^-2')

    err = exc_info.value
    assert err.source is unit
    assert "No known simplification path" in str(err)


def test_simplify_left_right():
    conv = simplify_left(parse_unit('((m/s)*s)/h'), 'Length')
    assert conv.target == get_unit('m') / get_unit('h')
    assert conv.factor == pytest.approx(1.0)

    # Right hand rewrite of a denominator inverts the factor.
    conv = simplify_right(parse_unit('km/((m/s)*ms)'), 'Length')
    assert conv.target == get_unit('km') / get_unit('m')
    assert conv.factor == pytest.approx(1000.0)

    conv = simplify_right(parse_unit('kg*((m/s)*ms)'), 'Length')
    assert conv.target == UnitMul(get_unit('kg'), get_unit('m'))
    assert conv.factor == pytest.approx(1e-3)

    with pytest.raises(SimplifyError):
        simplify_left(get_unit('m'), 'm')

    with pytest.raises(SimplifyError):
        simplify_right(parse_unit('1/s'), 'min')


def test_rewrites():
    found = dict(rewrites(parse_unit('m/s')))
    assert 'multiply by reciprocal (rev)' in found
    assert str(found['multiply by reciprocal (rev)'].target) == 'm·(1/s)'
    assert all(conv.factor == 1.0 for conv in found.values())


def test_cache():
    _RULE_CACHE.clear()
    unit = parse_unit('(km/h)*s')
    with unit_options(cache_simplify=False):
        simplify(unit, 'Length')
    assert not _RULE_CACHE

    simplify(unit, 'Length')
    assert len(_RULE_CACHE) == 1

    # Cached rule is re-applied to the actual variants.
    conv = simplify(parse_unit('(m/min)*h'), 'Length')
    assert conv.target is get_unit('m')
    assert conv.factor == pytest.approx(60.0)


def test_add_rule():
    A, B = UnitVar('A'), UnitVar('B')
    simplify(parse_unit('(km/h)*s'), 'Length')
    assert _RULE_CACHE

    new = add_rule((A / B) / (A / B), A / A, name='test', bidirectional=False)
    try:
        assert len(new) == 1
        assert not _RULE_CACHE
        assert rules()[-1] is new[0]

    finally:
        for rule in new:
            _RULES.remove(rule)
