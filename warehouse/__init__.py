"""Warehouse dashboard core: enderecamento, expedição and CRUD actions."""

__version__ = "0.1.0"
