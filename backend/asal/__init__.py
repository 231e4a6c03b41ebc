"""
Shared library for the Asal Media site backend
"""

__version__ = "0.1.0"
