"""
Exceptions raised by the units system.  All are subclasses of
`ValueError` via `UnitError`, so callers that only care that "the units
were wrong" can catch a single type.
"""

# Written by the pyqty developers, 2024.


# ======================================================================

class UnitError(ValueError):
    """
    Base exception for all unit related failures.  Keyword arguments
    (e.g. the units or dimensions involved) are stored as attributes
    and listed by `str()` when not `None`.
    """

    def __init__(self, *args, **kwargs):
        """
        Parameters
        ----------
        args :
            Passed to `ValueError`.
        kwargs :
            Details of the failure, stored as attributes.
        """
        super().__init__(*args)
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __str__(self):
        lines = [super().__str__()]
        lines += [f"{k} -> {v}" for k, v in vars(self).items()
                  if v is not None]
        return "\n".join(lines)


class DimensionError(UnitError):
    """
    Raised when units of different dimensions are converted or combined
    in a way that requires them to be the same.
    """

    def __init__(self, *args, from_dim=None, to_dim=None, **kwargs):
        super().__init__(*args, from_dim=from_dim, to_dim=to_dim, **kwargs)


class ShapeError(UnitError):
    """
    Raised when two units have the same dimension but different
    expression shapes, for an operation that requires identical shapes
    (e.g. addition).  Use `simplify` or `convert_to` to change shape.
    """


class SimplifyError(UnitError):
    """
    Raised when no registered simplification rule maps a source unit
    shape onto the requested target shape.
    """

    def __init__(self, *args, source=None, target=None, **kwargs):
        super().__init__(*args, source=source, target=target, **kwargs)


class UnitDomainError(UnitError, ArithmeticError):
    """
    Raised for numeric domain errors, e.g. a zero exponent, a root of
    degree zero or a value with no representation in a cast type.
    """


class UnitParseError(UnitError):
    """
    Raised when a unit or quantity string cannot be parsed.
    """

    def __init__(self, *args, text=None, pos=None, **kwargs):
        super().__init__(*args, text=text, pos=pos, **kwargs)
