"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the core to external concerns like:
- Graph storage (plain-text and CSV files)
- Report rendering (fixed-width text tables)
"""
