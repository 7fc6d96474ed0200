"""Request handlers."""

from .data import ShowDataService
from .design import DesignService

__all__ = ["DesignService", "ShowDataService"]
