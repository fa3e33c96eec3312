"""
Filesystem utilities for tempreg.
"""
