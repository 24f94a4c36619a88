"""
Functions for common physical relationships between quantities.  Each
function checks dimensions as part of the calculation, so (for example)
passing a length where a mass is expected raises `DimensionError`.

Examples
--------
>>> from pyqty.units import qty
>>> print(f"{mass_to_energy(qty(1.0, 'g')):.3e}")
8.988e+13 J
>>> print(f"{to_celsius(from_fahrenheit(212.0)):.1f}")
100.0
"""
from pyqty.constants import C, C2, G, GFORCE, H
from pyqty.units import Quantity, qty

# Written by the pyqty developers, 2024.

# ======================================================================

_ZERO_C = 273.15  # K.


# -- Gravity -----------------------------------------------------------

def gravitational_parameter(mass: Quantity) -> Quantity:
    """
    Calculate the standard gravitational parameter ``μ = G·M`` for a
    given mass, in m³/s².
    """
    return (mass * G).convert('GravParam')


def gravity(mass_1: Quantity, mass_2: Quantity, dist: Quantity
            ) -> Quantity:
    """
    Given two masses at a given distance, calculate the gravitational
    force exerted on each mass towards the other, in Newtons.
    """
    # F = G(M₁M₂ / r²)
    return (G * (mass_1 * mass_2 / dist.squared())).convert('Force')


def mass_as_weight(mass: Quantity) -> Quantity:
    """
    Return the gravitational force experienced by an object of this mass
    at the surface of Earth, in Newtons.
    """
    return (mass * GFORCE).convert('Force')


def weight_to_mass(weight: Quantity) -> Quantity:
    """
    Return the mass that would experience this gravitational force at
    the surface of Earth, in kilograms.
    """
    return (weight / GFORCE).convert('Mass')


# -- Mass / Energy -----------------------------------------------------

def energy_to_mass(energy: Quantity) -> Quantity:
    """Convert an energy to its corresponding mass, according to
    E = mc²."""
    return (energy / C2).convert('Mass')


def mass_to_energy(mass: Quantity) -> Quantity:
    """Convert a mass to its corresponding energy, according to
    E = mc²."""
    return (mass * C2).convert('Energy')


# -- Waves -------------------------------------------------------------

def frequency_to_wavelength(freq: Quantity, speed: Quantity = C
                            ) -> Quantity:
    """
    Calculate the wavelength of a wave with the given frequency and
    speed (default = speed of light), in metres.
    """
    return (speed / freq).convert('Length')


def photon_energy(freq: Quantity) -> Quantity:
    """
    Calculate the energy of a photon with the given frequency of light.
    The result is in electron volts.
    """
    return (freq * H).convert_to('eV')


def photon_frequency(energy: Quantity) -> Quantity:
    """Calculate the frequency of light for a photon with the given
    energy, in Hertz."""
    return (energy / H).convert('Frequency')


def wavelength_to_frequency(length: Quantity, speed: Quantity = C
                            ) -> Quantity:
    """
    Calculate the frequency of a wave with the given wavelength and
    speed (default = speed of light), in Hertz.
    """
    return (speed / length).convert('Frequency')


# -- Temperature -------------------------------------------------------

def from_celsius(c) -> Quantity:
    """Absolute temperature in Kelvin given degrees Celsius."""
    return qty(c + _ZERO_C, 'K')


def from_fahrenheit(f) -> Quantity:
    """Absolute temperature in Kelvin given degrees Fahrenheit."""
    return from_celsius((f - 32.0) / 1.8)


def from_rankine(r) -> Quantity:
    """Absolute temperature in Kelvin given degrees Rankine."""
    return qty(r / 1.8, 'K')


def to_celsius(temp: Quantity):
    """Return the temperature as a plain value in degrees Celsius."""
    return temp.value_as('K') - _ZERO_C


def to_fahrenheit(temp: Quantity):
    """Return the temperature as a plain value in degrees Fahrenheit."""
    return to_celsius(temp) * 1.8 + 32.0


def to_rankine(temp: Quantity):
    """Return the temperature as a plain value in degrees Rankine."""
    return temp.value_as('K') * 1.8
