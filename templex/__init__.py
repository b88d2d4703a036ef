"""
# Templex: __init__.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Source-template expansion by textual substitution.
"""

from templex._version import __version__
