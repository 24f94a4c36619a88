import pytest

from pyqty.units import (ConcreteUnit, UnitError, UnitFamily, LENGTH, TIME,
                         add_family, get_family, get_unit, get_unit_type,
                         known_units, known_unit_types, Length, Mass, Time,
                         Volume)


# Written by the pyqty developers, 2024.

# ======================================================================

_FAMILIES = [get_family(name) for name in (
    'One', 'Length', 'Mass', 'Time', 'Current', 'Temp', 'Amount',
    'Intensity', 'Frequency', 'Force', 'Pressure', 'Energy', 'Power',
    'Charge', 'Voltage', 'Resistance', 'Volume')]


# ----------------------------------------------------------------------

@pytest.mark.parametrize("family", _FAMILIES, ids=str)
def test_family_base(family: UnitFamily):
    assert family.base.scale() == 1.0
    assert family.base.family is family
    assert family.base.base() is family.base


@pytest.mark.parametrize("family", _FAMILIES, ids=str)
def test_family_members(family: UnitFamily):
    assert len(family) == len(family.symbols())
    for unit in family:
        assert unit.symbol in family
        assert unit in family
        assert family[unit.symbol] is unit
        assert get_unit(unit.symbol) is unit
        assert unit.dimension() == family.dim
        assert unit.shape() is family


@pytest.mark.parametrize("family", _FAMILIES, ids=str)
def test_leaf_stepping(family: UnitFamily):
    """
    Every leaf step is strictly monotone in scale and invertible, and
    repeated stepping in one direction terminates.
    """
    for unit in family:
        up, down = unit.step_up(), unit.step_down()
        if up is not None:
            assert up.scale() > unit.scale()
            assert up.step_down() is unit
            assert up.family is family
        if down is not None:
            assert down.scale() < unit.scale()
            assert down.step_up() is unit

        assert unit.step_to_top().step_up() is None
        assert unit.step_to_bottom().step_down() is None


def test_leaf_stepping_sequence():
    assert get_unit('m').step_up() is get_unit('km')
    assert get_unit('m').step_down() is get_unit('cm')
    assert get_unit('km').step_up() is None
    assert get_unit('nm').step_down() is None
    assert get_unit('s').step_up() is get_unit('min')
    assert get_unit('h').step_up() is get_unit('day')
    assert get_unit('kg').step_up() is get_unit('T')
    assert get_unit('L').step_up() is get_unit('kL')


def test_customary_units_step_separately():
    # Metric variants never step onto customary ones (and vice versa).
    assert get_unit('m').step_up() is get_unit('km')
    assert get_unit('ft').step_up() is get_unit('yd')
    assert get_unit('yd').step_up() is get_unit('mi')
    assert get_unit('ft').step_down() is None
    assert get_unit('NM').step_up() is None
    assert get_unit('kg').step_down() is get_unit('g')
    assert get_unit('lb').step_down() is get_unit('oz')


def test_customary_scales():
    assert get_unit('ft').scale() == pytest.approx(0.3048)
    assert get_unit('lb').scale() == pytest.approx(0.45359237)
    assert get_unit('gal').scale() == pytest.approx(3.785411784e-3)
    assert get_unit('L').scale() == pytest.approx(1e-3)


def test_family_template_operators():
    assert Length / Time == get_unit('m') / get_unit('s')
    assert Mass * Length == get_unit('kg') * get_unit('m')
    assert Length ** 2 == get_unit('m') ** 2
    assert 1 / Time == 1 / get_unit('s')
    assert str(Volume.base) == 'kL'


def test_family_str_repr():
    assert str(Length) == 'Length'
    assert repr(Length) == "UnitFamily('Length')"
    assert repr(get_unit('km')) == "Length['km']"
    assert str(get_unit('km')) == 'km'


def test_family_lookup_errors():
    with pytest.raises(KeyError):
        _ = Length['kg']

    with pytest.raises(UnitError):
        get_unit('furlong')

    with pytest.raises(UnitError):
        get_family('Colour')

    with pytest.raises(UnitError):
        get_unit_type('Colour')


def test_unit_types():
    assert get_unit_type('Length') is get_unit('m')
    assert get_unit_type('Speed') == get_unit('m') / get_unit('s')
    assert get_unit_type('Area') == get_unit('m') ** 2
    assert 'Speed' in known_unit_types()
    assert 'km' in known_units()


def test_family_validation():
    # Base must have a scale of exactly one.
    with pytest.raises(ValueError):
        UnitFamily('Bad', LENGTH, {'a': 2.0, 'b': 3.0}, base='a')

    # Scales must be unique.
    with pytest.raises(ValueError):
        UnitFamily('Bad', LENGTH, {'a': 1.0, 'b': 1.0}, base='a')

    with pytest.raises(ValueError):
        UnitFamily('Bad', LENGTH, {'a': 1.0}, base='a', other={'b': 1.0})

    # Scales must be positive.
    with pytest.raises(ValueError):
        UnitFamily('Bad', LENGTH, {'a': 1.0, 'b': -1.0}, base='a')

    # Symbols must be unique.
    with pytest.raises(ValueError):
        UnitFamily('Bad', LENGTH, {'a': 1.0}, base='a', other={'a': 2.0})


def test_duplicate_registration():
    with pytest.raises(ValueError):
        add_family('Length', LENGTH, {'lu': 1.0}, base='lu')

    with pytest.raises(ValueError):
        add_family('Duration', TIME, {'s': 1.0}, base='s')


def test_concrete_unit_equality():
    km = get_unit('km')
    assert km == ConcreteUnit(Length, 'km', 1000.0)
    assert km != get_unit('m')
    assert hash(km) == hash(ConcreteUnit(Length, 'km', 1000.0))
