"""
Units (:mod:`pyqty.units`)
==========================

.. currentmodule:: pyqty.units

Dimensionally safe physical quantities, built from composable unit
expressions.

Examples
--------

Creation of quantities is done using the factory function ``qty()`` in
a natural way, and gives a ``Quantity`` object as a result.  See
documentation for ``parse_unit()`` for details on valid unit strings.

>>> d = qty(12.0, 'm')
>>> t = qty(6.0, 's')
>>> d / t
qty(2.0, 'm/s')

Arithmetic builds units structurally and never simplifies them behind
your back.  Any unit of the same dimension can be converted to, and
named unit types (``Speed``, ``Energy``, ...) convert to their base
unit:

>>> print(qty(90.0, 'km/h').convert('Speed'))
25.0 m/s

Units can also be written directly using unit families and symbols:

>>> v = 2.0 * (Length / Time)
>>> print(v)
2.0 m/s
>>> print(3.0 * get_unit('km'))
3.0 km

Addition and subtraction require the same unit shape and the result
keeps the unit of the left hand side:

>>> print(qty(2.0, 'km') + qty(50.0, 'm'))
2.05 km

Quantities of different dimension cannot be combined or converted:

>>> qty(1.0, 'kg').value_as('m')
... # doctest: +ELLIPSIS, +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
...
DimensionError: Cannot convert 'kg' [M] to 'm' [L]: Dimensions differ.

Except through a registered physical relationship, such as mass-energy
equivalence:

>>> print(f"{qty(1.0, 'kg').convert_to('J'):.4e}")
8.9876e+16 J

Changing the shape of a unit is done by simplification, using a fixed
catalogue of rewrite rules:

>>> a = qty(2.0, 'm') / qty(4.0, 's') / qty(0.5, 's')
>>> print(a)
1.0 (m/s)/s
>>> print(a.simplify('m/(s*s)'))
1.0 m/(s·s)

Values can be normalized to bring them into a convenient range:

>>> print(qty(0.25, 'km').normalize())
250.0 m
"""

from ._base import Unit, UnitMul, UnitDiv, UnitInv, UnitPow, ExpVar
from ._concrete import (ConcreteUnit, UnitFamily, add_family, add_unit_type,
                        get_family, get_unit, get_unit_type, known_units,
                        known_unit_types)
from ._convert import (Conversion, block_relationship, conversion_factor,
                       convert, convert_factor, relationships,
                       set_relationship)
from ._dimension import (Dimension, DIMLESS, LENGTH, MASS, TIME, CURRENT,
                         TEMP, AMOUNT, INTENSITY, FREQUENCY, VELOCITY, ACCEL,
                         FORCE, AREA, VOLUME, DENSITY, PRESSURE, ENERGY,
                         POWER, CHARGE, VOLTAGE, RESISTANCE)
from ._opts import (UnitOptions, get_unit_options, set_unit_options,
                    unit_options)
from ._parse import parse_qty, parse_unit, to_unit
from ._qty import Quantity, qty
from ._simplify import (Rule, UnitVar, add_rule, rewrites, rules, simplify,
                        simplify_left, simplify_right)
from .exception import (UnitError, DimensionError, ShapeError, SimplifyError,
                        UnitDomainError, UnitParseError)
from ._defs import (One, Length, Mass, Time, Current, Temp, Amount,
                    Intensity, Frequency, Force, Pressure, Energy, Power,
                    Charge, Voltage, Resistance, Volume, Speed, Accel,
                    Momentum, Area, Density, Torque, GravParam, HeatCapacity,
                    HeatSpecific)  # Sets up standard units.
