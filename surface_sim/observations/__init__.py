"""Watching tools for the surface."""
