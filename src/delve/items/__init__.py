"""Inventory, equipment and consumable effects."""
