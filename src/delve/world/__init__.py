"""Entities and the ordered entity collection they live in."""
