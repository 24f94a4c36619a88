from ._concrete import add_family, add_unit_type
from ._convert import set_relationship
from ._dimension import (DIMLESS, LENGTH, MASS, TIME, CURRENT, TEMP, AMOUNT,
                         INTENSITY, FREQUENCY, FORCE, VOLUME, PRESSURE,
                         ENERGY, POWER, CHARGE, VOLTAGE, RESISTANCE)

# Written by the pyqty developers, 2024.

# == Unit Families =====================================================

# Every family is based on the coherent SI unit so that scales of
# different shapes (e.g. 'J' and 'N*m') are directly comparable.
# Customary units are given as 'other' variants so that they step only
# amongst themselves.

_SI_PREFIXES = {'μ': 1e-6, 'm': 1e-3, '': 1e0, 'k': 1e+3, 'M': 1e+6,
                'G': 1e+9, 'T': 1e+12}


def _prefixed(symbol: str) -> dict[str, float]:
    """Variants 'μX' to 'TX' of base unit 'X'."""
    return {prefix + symbol: k for prefix, k in _SI_PREFIXES.items()}


# -- Dimensionless -----------------------------------------------------

One = add_family('One', DIMLESS, {'1': 1.0}, base='1')

# -- Length ------------------------------------------------------------

Length = add_family('Length', LENGTH, {
    'nm': 1e-9, 'μm': 1e-6, 'mm': 1e-3, 'cm': 1e-2, 'm': 1e0, 'km': 1e+3,
}, base='m', other={
    'ft': 0.3048,  # International foot.
    'yd': 0.9144,
    'mi': 1609.344,  # International mile.
    'NM': 1852.0,  # International NM.
})

# -- Mass --------------------------------------------------------------

Mass = add_family('Mass', MASS, {
    'pg': 1e-15, 'ng': 1e-12, 'μg': 1e-9, 'mg': 1e-6, 'g': 1e-3, 'kg': 1e0,
    'T': 1e+3, 'kT': 1e+6, 'MT': 1e+9, 'GT': 1e+12,  # Metric tonnes.
    'M🜨': 5.97220e+24,  # Earth.
    'M♃': 1.89813e+27,  # Jupiter.
    'M☉': 1.98847e+30,  # Sun.
}, base='kg', other={
    'oz': 28.349523125e-3,  # Avoirdupois.
    'lb': 0.45359237,  # Defn Intl & US Standard Pound.
})

# -- Time --------------------------------------------------------------

Time = add_family('Time', TIME, {
    'ms': 1e-3, 's': 1e0, 'min': 60.0, 'h': 3600.0, 'day': 86400.0,
}, base='s')

# -- Other Base Quantities ---------------------------------------------

Current = add_family('Current', CURRENT, _prefixed('A'), base='A')
Temp = add_family('Temp', TEMP, _prefixed('K'), base='K')
Amount = add_family('Amount', AMOUNT, _prefixed('mol'), base='mol')
Intensity = add_family('Intensity', INTENSITY, _prefixed('cd'), base='cd')

# -- Derived Quantities ------------------------------------------------

Frequency = add_family('Frequency', FREQUENCY, _prefixed('Hz'), base='Hz')

Force = add_family('Force', FORCE, _prefixed('N'), base='N', other={
    'ozf': 0.2780139,
    'lbf': 4.448222,
})

Pressure = add_family('Pressure', PRESSURE, _prefixed('Pa'), base='Pa')

Energy = add_family('Energy', ENERGY, _prefixed('J') | {
    'eV': 1.602176634e-19,
}, base='J')

Power = add_family('Power', POWER, _prefixed('W'), base='W')
Charge = add_family('Charge', CHARGE, _prefixed('C'), base='C')
Voltage = add_family('Voltage', VOLTAGE, _prefixed('V'), base='V')
Resistance = add_family('Resistance', RESISTANCE, _prefixed('Ω'), base='Ω')

# Note: The base of volume is kL = 1 m³, so that e.g. 'L' and 'm^3' are
# interconvertible directly.
_GAL = 3.785411784e-3  # US gallon.
Volume = add_family('Volume', VOLUME, {
    'μL': 1e-9, 'mL': 1e-6, 'L': 1e-3, 'kL': 1e0, 'ML': 1e+3, 'GL': 1e+6,
    'TL': 1e+9,
}, base='kL', other={
    'fl_dr': _GAL / 1280, 'fl_oz': _GAL / 160, 'cup': _GAL / 16,
    'pt': _GAL / 8, 'qt': _GAL / 4, 'gal': _GAL,
})

# == Unit Types ========================================================

Speed = add_unit_type('Speed', Length / Time)
Accel = add_unit_type('Accel', Speed / Time)
Momentum = add_unit_type('Momentum', Mass * Speed)
Area = add_unit_type('Area', Length ** 2)
Density = add_unit_type('Density', Mass / Volume)
Torque = add_unit_type('Torque', Length * Force)
GravParam = add_unit_type('GravParam', Length ** 3 / Time ** 2)
HeatCapacity = add_unit_type('HeatCapacity', Energy / Temp)
HeatSpecific = add_unit_type('HeatSpecific', HeatCapacity / Mass)

# == Relationships =====================================================

_C = 299792458.0  # m/s.
set_relationship(MASS, ENERGY, fwd=_C ** 2, name='E = mc²')
