"""Resource deletion."""
from .service import DeletionService

__all__ = ['DeletionService']
