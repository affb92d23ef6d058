"""Utility functions for the live client."""
