"""
Base service class.
Services own transactions and coordinate repositories.
"""

from abc import ABC


class BaseService(ABC):
    """Base service class for all services."""
    pass
