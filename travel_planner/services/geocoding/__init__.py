"""Geocoding and location resolution services.

This module provides geocoding functionality for converting place names to
coordinates using the Nominatim OpenStreetMap API.

Public API:
    - get_coordinates_nominatim: Function to convert a place name to coordinates
"""
from travel_planner.services.geocoding.geocoding import get_coordinates_nominatim

__all__ = [
    "get_coordinates_nominatim",
]
