"""Graph adapters - Implementations of GraphRepositoryPort.

Available implementations:
- TextGraphRepository: Loads the plain-text graph description
- CSVGraphRepository: Loads vertices and edges from CSV files
"""

from .csv_repository import CSVGraphRepository
from .text_repository import TextGraphRepository

__all__ = ["TextGraphRepository", "CSVGraphRepository"]
