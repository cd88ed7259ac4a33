"""Utility helpers for propsel."""
