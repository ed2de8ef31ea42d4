"""
WeGrow Node package initializer

Keep this module lightweight; the API and runtime are imported on demand.
"""

__all__ = []
