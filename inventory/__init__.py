"""
Offline inventory tracker: items with name, price and quantity.

A rendering layer starts with ``InventoryApplication().on_create()`` and
builds its screens from ``application.view_models``.
"""

# Registers the TRACE level and Logger.trace before any submodule logs.
from inventory.core import logging_config  # noqa: F401
from inventory.main import InventoryApplication

__all__ = ["InventoryApplication"]
