"""
HTTP routes, one blueprint per area.
"""

from . import api, brand, store

BLUEPRINTS = (brand.bp, store.bp, api.bp)

__all__ = ['BLUEPRINTS']
