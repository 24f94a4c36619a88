"""
Physical constants, given as quantities.

>>> from pyqty.constants import C
>>> print(C)
299792458.0 m/s
"""
from pyqty.units import qty

# Written by the pyqty developers, 2024.

# ======================================================================

C = qty(299792458.0, 'm/s')
"""Speed of light travelling through a perfect vacuum."""

C2 = C.squared()
"""Speed of light, squared; Relationship between mass and energy."""

E_CHARGE = qty(1.602176634e-19, 'C')
"""Elementary charge; Electrical charge of a single proton."""

G = qty(6.6743e-11, 'm^3/s^2/kg')
"""Gravitational constant."""

GFORCE = qty(9.80665, 'm/s/s')
"""One "G"; The average acceleration due to gravity at the surface of
Earth."""

H = qty(4.135667696e-15, 'eV/Hz')
"""Planck constant; Used to find the energy of a photon."""

K_B = qty(8.617333262e-5, 'eV/K')
"""Boltzmann constant; Relationship between thermal energy and
temperature."""

R = qty(8.31446261815324, 'J/K/mol')
"""Gas constant; Relationship between energy, temperature and amount of
substance."""
