"""
Stage 1: Loader

Reads the raw movie CSV and validates its schema.
"""

from .loader import MovieLoader, load_movies

__all__ = ['MovieLoader', 'load_movies']
