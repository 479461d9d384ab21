"""Utility modules for cosmic wealth calculations."""
