"""Utility helpers for gallop."""
