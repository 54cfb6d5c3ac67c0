"""Persistent storage for scanned foods."""

from .food_store import FoodRecord, FoodStore, StoreError

__all__ = ["FoodRecord", "FoodStore", "StoreError"]
