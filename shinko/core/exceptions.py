"""
Custom Exceptions - Shinko OS
shinko/core/exceptions.py

Exception classes raised by the opportunity repository.
"""


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in the store."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class EntityDeletedException(RepositoryException):
    """Entity has been soft-deleted."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} has been deleted")


class OrganizationMismatchException(RepositoryException):
    """Entity belongs to a different organization than the caller."""

    def __init__(self, entity_type: str, entity_id: str, organization_id: int):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.organization_id = organization_id
        super().__init__(
            f"{entity_type} with ID {entity_id} does not belong to organization {organization_id}"
        )
