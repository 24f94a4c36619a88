"""
Concrete (leaf) units and the families they belong to, along with the
module registries of known unit symbols, families and named unit types.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from ._base import Unit
from ._dimension import Dimension
from .exception import UnitError

# Written by the pyqty developers, 2024.

# ======================================================================


class UnitFamily:
    """
    A closed, finite set of named variants of one physical dimension,
    e.g. ``Length`` = {nm, μm, mm, cm, m, km}.  Each variant carries a
    scale relative to the base variant, which always has scale ``1.0``
    and is the coherent SI unit of the dimension.

    Variants are held in strictly increasing order of scale; this
    order defines how a unit steps up and down.  A family may also
    hold `other` variants (e.g. customary units such as ``ft`` and
    ``mi``) which step only amongst themselves, so that stepping a
    metric unit never lands on a customary one.

    Families can be used directly to build unit templates from their
    base units, e.g. ``Length / Time`` is ``m/s``.

    .. note:: Families are normally created with `add_family` so that
       their symbols are registered for lookup and parsing.
    """

    def __init__(self, name: str, dim: Dimension,
                 variants: dict[str, float], base: str,
                 other: dict[str, float] = None):
        """
        Parameters
        ----------
        name : str
            Family name, e.g. ``'Length'``.
        dim : Dimension
            Dimension shared by all variants.
        variants : dict[str, float]
            Mapping of unit symbol -> scale relative to the base.
        base : str
            Symbol of the base variant (in `variants`).  This must have a
            scale of exactly one.
        other : dict[str, float], optional
            Additional variants forming a separate stepping sequence.

        Raises
        ------
        ValueError
            If `base` is not given a scale of one, any scale is not
            positive, any symbol is repeated or two variants share the
            same scale.
        """
        if variants.get(base) != 1.0:
            raise ValueError(f"Base unit '{base}' of {name} must have a "
                             f"scale of 1.")
        other = other or {}
        if repeated := variants.keys() & other.keys():
            raise ValueError(f"Units {sorted(repeated)} of {name} "
                             f"repeated.")

        self.name = name
        self.dim = dim
        ordered = sorted((variants | other).items(), key=lambda item: item[1])
        for (sym_a, k_a), (sym_b, k_b) in zip(ordered, ordered[1:]):
            if k_a == k_b:
                raise ValueError(f"Units '{sym_a}' and '{sym_b}' of {name} "
                                 f"have the same scale.")
        if ordered[0][1] <= 0:
            raise ValueError(f"Unit '{ordered[0][0]}' of {name} must have "
                             f"a positive scale.")

        self._units = {sym: ConcreteUnit(self, sym, float(k))
                       for sym, k in ordered}
        self._chains = [[u for u in self._units.values() if u.symbol in group]
                        for group in (variants, other) if group]
        self._where = {u.symbol: (chain, i) for chain in self._chains
                       for i, u in enumerate(chain)}
        self.base = self._units[base]

    # -- Container Methods ----------------------------------------------

    def __contains__(self, item) -> bool:
        if isinstance(item, ConcreteUnit):
            return item.family is self
        return item in self._units

    def __getitem__(self, symbol: str) -> ConcreteUnit:
        try:
            return self._units[symbol]
        except KeyError:
            raise KeyError(f"No unit '{symbol}' in {self.name}.") from None

    def __iter__(self) -> Iterator[ConcreteUnit]:
        return iter(self._units.values())

    def __len__(self) -> int:
        return len(self._units)

    def symbols(self) -> list[str]:
        """Unit symbols in increasing order of scale."""
        return list(self._units)

    # -- Stepping -------------------------------------------------------

    def adjacent(self, unit: ConcreteUnit, offset: int
                 ) -> Optional[ConcreteUnit]:
        """
        Return the variant `offset` places away from `unit` in its
        stepping sequence, or ``None`` if this runs off either end.
        """
        chain, idx = self._where[unit.symbol]
        idx += offset
        if 0 <= idx < len(chain):
            return chain[idx]
        return None

    # -- Template Operators ---------------------------------------------
    # Families stand in for their base unit when building templates.

    def __mul__(self, rhs):
        return self.base * _family_base(rhs)

    def __rmul__(self, lhs):
        return _family_base(lhs) * self.base

    def __truediv__(self, rhs):
        return self.base / _family_base(rhs)

    def __rtruediv__(self, lhs):
        return _family_base(lhs) / self.base

    def __pow__(self, exp):
        return self.base ** exp

    def __repr__(self) -> str:
        return f"UnitFamily('{self.name}')"

    def __str__(self) -> str:
        return self.name


# ----------------------------------------------------------------------

@dataclass(frozen=True, repr=False)
class ConcreteUnit(Unit):
    """
    A single named unit, e.g. ``km``, which is one variant of a
    `UnitFamily`.  Its scale is the fixed factor `k` relative to the
    family base.
    """
    family: UnitFamily
    symbol: str
    k: float

    def base(self) -> ConcreteUnit:
        return self.family.base

    def dimension(self) -> Dimension:
        return self.family.dim

    def leaves(self) -> Iterator[ConcreteUnit]:
        yield self

    def scale(self) -> float:
        return self.k

    def shape(self) -> UnitFamily:
        return self.family

    def step_down(self) -> Optional[ConcreteUnit]:
        return self.family.adjacent(self, -1)

    def step_up(self) -> Optional[ConcreteUnit]:
        return self.family.adjacent(self, +1)

    def _str(self, nested: bool) -> str:
        return self.symbol

    def __repr__(self) -> str:
        return f"{self.family.name}['{self.symbol}']"


# == Registries ========================================================

_KNOWN_FAMILIES: dict[str, UnitFamily] = {}
_KNOWN_UNITS: dict[str, ConcreteUnit] = {}
_UNIT_TYPES: dict[str, Unit] = {}


def add_family(name: str, dim: Dimension, variants: dict[str, float],
               base: str, other: dict[str, float] = None) -> UnitFamily:
    """
    Create a new `UnitFamily` and register its name (as a unit type)
    and all its unit symbols.  See `UnitFamily` for parameters.

    Raises
    ------
    ValueError
        If the family name or any symbol is already registered.
    """
    if name in _UNIT_TYPES:
        raise ValueError(f"Unit type '{name}' already defined.")
    for sym in variants | (other or {}):
        if sym in _KNOWN_UNITS:
            raise ValueError(f"Unit '{sym}' already defined in "
                             f"{_KNOWN_UNITS[sym].family}.")

    family = UnitFamily(name, dim, variants, base, other)
    _KNOWN_FAMILIES[name] = family
    _UNIT_TYPES[name] = family.base
    for unit in family:
        _KNOWN_UNITS[unit.symbol] = unit
    return family


def add_unit_type(name: str, template) -> Unit:
    """
    Register a named unit type (e.g. ``'Speed'``) for the given
    template, which may be any unit or family.  Named types can be used
    in parsed expressions as conversion and simplification targets.

    Raises
    ------
    ValueError
        If `name` is already registered.
    """
    if name in _UNIT_TYPES:
        raise ValueError(f"Unit type '{name}' already defined.")
    template = _family_base(template)
    if not isinstance(template, Unit):
        raise TypeError(f"Unit type '{name}' requires a unit template.")
    _UNIT_TYPES[name] = template.base()
    return _UNIT_TYPES[name]


def get_family(name: str) -> UnitFamily:
    """Return the registered `UnitFamily` called `name`."""
    try:
        return _KNOWN_FAMILIES[name]
    except KeyError:
        raise UnitError(f"Unknown unit family '{name}'.") from None


def get_unit(symbol: str) -> ConcreteUnit:
    """Return the registered `ConcreteUnit` with the given symbol."""
    try:
        return _KNOWN_UNITS[symbol]
    except KeyError:
        raise UnitError(f"Unknown unit '{symbol}'.") from None


def get_unit_type(name: str) -> Unit:
    """
    Return the base template of the registered unit type `name`, e.g.
    ``get_unit_type('Speed')`` gives ``m/s``.
    """
    try:
        return _UNIT_TYPES[name]
    except KeyError:
        raise UnitError(f"Unknown unit type '{name}'.") from None


def known_units() -> dict[str, ConcreteUnit]:
    """Return a copy of the mapping of all registered unit symbols."""
    return dict(_KNOWN_UNITS)


def known_unit_types() -> list[str]:
    """Return the names of all registered unit types."""
    return list(_UNIT_TYPES)


# == Private Functions =================================================

def _family_base(x):
    return x.base if isinstance(x, UnitFamily) else x
