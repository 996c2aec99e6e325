"""Rendering adapters - Implementations of ReportRendererPort.

Available implementations:
- TextTableRenderer: Fixed-width plain-text tables
"""

from .table_renderer import TextTableRenderer

__all__ = ["TextTableRenderer"]
