"""Concrete adapters for the interfaces in :mod:`pgkb.interfaces`."""
