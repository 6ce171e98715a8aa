"""Application ports - interfaces for external adapters."""

from motorent.application.ports.permission_checker import PermissionChecker
from motorent.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
