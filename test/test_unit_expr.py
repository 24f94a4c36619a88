from fractions import Fraction

import pytest

from pyqty.units import (Quantity, UnitDiv, UnitDomainError, UnitInv,
                         UnitMul, UnitPow, FORCE, VELOCITY, DIMLESS,
                         get_unit, parse_unit, unit_options)


# Written by the pyqty developers, 2024.

# ======================================================================

m, km, s, h, kg = (get_unit(x) for x in ('m', 'km', 's', 'h', 'kg'))

_COMPOUND_UNITS = [
    m / s, km / h, m * s, kg * m / s ** 2, 1 / s, 1 / (m / s), m ** 2,
    m ** -1, km ** Fraction(1, 2), (m / s) / s, (kg * m) * (s / m),
    get_unit('ft') / get_unit('min'),
]


# ----------------------------------------------------------------------

def test_structural_dimension():
    assert (m / s).dimension() == VELOCITY
    assert (kg * m / s ** 2).dimension() == FORCE
    assert (m / m).dimension() == DIMLESS
    assert (1 / s).dimension() == s.dimension().negate()
    assert (m ** Fraction(1, 2)).dimension().L == Fraction(1, 2)


def test_structural_scale():
    assert (km / h).scale() == pytest.approx(1000.0 / 3600.0)
    assert (km * h).scale() == pytest.approx(3.6e6)
    assert (1 / km).scale() == pytest.approx(1e-3)
    assert (km ** 2).scale() == 1e6
    assert (km ** Fraction(1, 2)).scale() == pytest.approx(1000.0 ** 0.5)
    assert (km / h).base() == m / s
    assert (km / h).base().scale() == 1.0


def test_shape():
    assert (km / h).same_shape(m / s)
    assert not (m / s).same_shape(m * s)
    assert not (m / s).same_shape(s / m)
    assert (m ** 2).shape() == ('^', m.family, Fraction(2))
    assert list((kg * m / s).leaves()) == [kg, m, s]


def test_construction_types():
    assert isinstance(m * s, UnitMul)
    assert isinstance(m / s, UnitDiv)
    assert isinstance(1 / s, UnitInv)
    assert isinstance(m ** 2, UnitPow)
    assert m ** 1 is m

    # Numbers times units give quantities.
    q = 2.0 * km
    assert isinstance(q, Quantity)
    assert q.value == 2.0 and q.unit is km

    q = 4.0 / s
    assert isinstance(q, Quantity)
    assert q.value == 4.0 and q.unit == UnitInv(s)


def test_structural_equality():
    assert m * s == UnitMul(m, s)
    assert m * s != s * m
    assert UnitMul(m, s) != UnitDiv(m, s)
    assert len({m / s, m / s, km / h}) == 2


def test_pow_fold():
    # Square root of a square returns the original unit exactly.
    assert (m ** 2).sqrt() is m
    assert (km ** 3).cbrt() is km
    assert (m ** 2) ** Fraction(1, 2) is m
    assert ((m ** 2) ** 3).exp == 6
    assert m.sqrt().squared() is m
    assert (m ** 2).root(-2) == UnitPow(m, Fraction(-1))


def test_pow_domain_errors():
    with pytest.raises(UnitDomainError):
        m.pow(0)

    with pytest.raises(UnitDomainError):
        m.root(0)

    with pytest.raises(UnitDomainError):
        (m ** 2).pow(0)

    # Domain errors are also arithmetic errors.
    with pytest.raises(ArithmeticError):
        m.root(0)


@pytest.mark.parametrize("unit, expected", [
    (m / s, 'm/s'),
    (kg * m / s ** 2, '(kg·m)/s²'),
    (1 / (m / s), '1/(m/s)'),
    ((m / s) / s, '(m/s)/s'),
    (m / (s * s), 'm/(s·s)'),
    (m ** -2, 'm⁻²'),
    ((m / s) ** 2, '(m/s)²'),
    (m ** Fraction(1, 2), 'm^(1/2)'),
])
def test_str(unit, expected: str):
    assert str(unit) == expected


def test_str_ascii():
    with unit_options(unicode_str=False):
        assert str(kg * m / s ** 2) == '(kg*m)/s^2'
        assert str(m ** -2) == 'm^-2'
    assert f"{m / s:>6}" == '   m/s'


def test_repr():
    assert repr(m / s) == "UnitDiv(Length['m'], Time['s'])"
    assert repr(1 / s) == "UnitInv(Time['s'])"


@pytest.mark.parametrize("unit", _COMPOUND_UNITS, ids=str)
def test_compound_stepping(unit):
    """
    Stepping a compound unit keeps its shape, is strictly monotone in
    scale and terminates in both directions.
    """
    for step_fn in ('step_down', 'step_up'):
        current, count = unit, 0
        while (step := getattr(current, step_fn)()) is not None:
            assert step.same_shape(unit)
            assert step != current
            if step_fn == 'step_down':
                assert step.scale() < current.scale()
            else:
                assert step.scale() > current.scale()
            current, count = step, count + 1
            assert count < 1000


def test_compound_step_choice():
    # Each step takes the candidate nearest the current scale.
    # m/s down: m/min (1/60) is nearer than cm/s (0.01).
    assert (m / s).step_down() == m / get_unit('min')
    # km/h down: km/day (0.0116) is nearer than m/h (0.00028).
    assert (km / h).step_down() == km / get_unit('day')
    # m*s down: cm·s (0.01) is nearer than m·ms (0.001).
    assert (m * s).step_down() == get_unit('cm') * s
    # m/s up: km/s and m/ms are both 1000, lhs preferred.
    assert (m / s).step_up() == km / s
    # Reciprocals and negative powers step inversely.
    assert (1 / s).step_down() == 1 / get_unit('min')
    assert (m ** -1).step_down() == UnitPow(km, Fraction(-1))


@pytest.mark.parametrize("unit", [
    km / h, 1 / s, 1 / (km / h), m ** 2, m ** -1, m ** 3,
    km ** Fraction(1, 2),
], ids=str)
def test_compound_step_round_trip(unit):
    down, up = unit.step_down(), unit.step_up()
    assert down is not None or up is not None
    if down is not None:
        assert down.step_up() == unit
    if up is not None:
        assert up.step_down() == unit


def test_compound_step_round_trip_down():
    # Only stepping down then up returns m/s; km/s steps down to km/min.
    assert (m / s).step_down().step_up() == m / s
    assert (km / s).step_down() == km / get_unit('min')


def test_scale_factor():
    assert km.scale_factor(m) == 1000.0
    assert (km / h).scale_factor(m / s) == pytest.approx(1 / 3.6)
    assert parse_unit('N').scale_factor(kg * m / s ** 2) == 1.0
