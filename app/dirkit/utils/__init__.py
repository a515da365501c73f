"""Utility modules for dirkit."""
