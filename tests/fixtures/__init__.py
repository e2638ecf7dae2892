"""Test fixtures for vehicle_tables tests."""

from .tables import GUN, HULL, MAIN_GUN, TURRET, make_component, make_table

__all__ = [
    "GUN",
    "HULL",
    "MAIN_GUN",
    "TURRET",
    "make_component",
    "make_table",
]
