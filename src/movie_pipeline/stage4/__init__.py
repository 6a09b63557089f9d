"""
Stage 4: Exporter

Writes the cleaned dataset to CSV.
"""

from .exporter import export_dataset, SUPPORTED_DELIMITERS

__all__ = ['export_dataset', 'SUPPORTED_DELIMITERS']
