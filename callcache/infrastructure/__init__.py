"""
Infrastructure Module

Concrete Store backends used by the call cache.
"""
