"""
.. This module acts as the top-level API documentation.

.. module: pyqty

Dimensionally safe physical quantities and units.

Subpackages and modules:

    - units: Unit expressions, conversion, simplification and quantities.
    - constants: Physical constants as quantities.
    - equations: Common physical relationships between quantities.
"""

__version__ = "0.1.0"

import sys

# Written by the pyqty developers, 2024.

# ======================================================================

assert sys.version_info >= (3, 10)
