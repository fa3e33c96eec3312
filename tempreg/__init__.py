"""
Temporary-resource lifecycle tracker.
"""

__version__ = "0.1.0"
