"""Entity index exceptions."""

from .base import OntoguardError


class EntityIndexError(OntoguardError):
    """Base class for entity index errors."""

    pass


class UnknownEntityTypeError(EntityIndexError):
    """Raised when an entity type outside the known six is requested."""

    def __init__(self, entity_type: str):
        super().__init__(
            f"Unknown entity type: {entity_type}",
            details={"entity_type": entity_type},
        )
        self.entity_type = entity_type
