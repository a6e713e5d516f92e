"""Infrastructure layer for the dataset mapper.

This layer contains adapters for storage, file I/O and console output.
It implements the ports defined in the application layer.
"""

__all__ = []
