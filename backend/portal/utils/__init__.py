"""Utility package."""
