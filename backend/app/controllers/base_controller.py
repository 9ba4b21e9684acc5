"""
Base controller class.
Controllers run the checks for one API operation, call services and
return Pydantic response documents.
"""

from abc import ABC


class BaseController(ABC):
    """Base controller class for all controllers."""
    pass
