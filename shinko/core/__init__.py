"""
Core Package - Shinko OS
shinko/core/__init__.py

Core infrastructure: dependencies, exceptions, logging.
Import dependencies from shinko.core.dependencies directly; it pulls in
the repository layer, which itself imports the exceptions below.
"""

from shinko.core.exceptions import (
    EntityDeletedException,
    EntityNotFoundException,
    OrganizationMismatchException,
    RepositoryException,
)

__all__ = [
    "EntityDeletedException",
    "EntityNotFoundException",
    "OrganizationMismatchException",
    "RepositoryException",
]
