"""Route group exports."""

from . import allocation, health, locations, routes

__all__ = ["allocation", "health", "locations", "routes"]
