# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

from pyqty import __version__

# -- Path setup --------------------------------------------------------

# Run with pyqty installed (pip install -e .); otherwise uncomment:
# import os, sys
# sys.path.insert(0, os.path.abspath('../..'))

# -- Project information -----------------------------------------------

project = 'pyqty'
copyright = '2024, The pyqty developers'  # noqa
author = 'The pyqty developers'
version = __version__  # Short X.Y version.
release = version  # Full version, including alpha/beta/rc tags.

# -- General configuration ---------------------------------------------

extensions = ['sphinx.ext.autodoc',
              'sphinx.ext.autosummary',
              'sphinx.ext.doctest',
              'sphinx.ext.napoleon']
templates_path = ['_templates']
exclude_patterns = []

autodoc_default_options = {
    'members': True,
    'special-members': '__add__, __sub__, __mul__, __truediv__, __pow__',
    'exclude-members': '__dict__, __hash__, __module__, __weakref__'}

napoleon_numpy_docstring = True
napoleon_google_docstring = False

# -- Options for HTML output -------------------------------------------

html_theme = 'pydata_sphinx_theme'
html_static_path = ['_static']
