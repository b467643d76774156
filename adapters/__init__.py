"""
Adapters package - External service connections.
"""

from adapters import open_food_facts

__all__ = ["open_food_facts"]
