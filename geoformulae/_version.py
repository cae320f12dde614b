"""
Exposes the version of geoformulae
"""

__all__ = ['__version__']

__version__ = 'v0.1.0'
