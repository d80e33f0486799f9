"""Root of the ontoguard exception hierarchy.

Everything the package raises on purpose derives from OntoguardError; the
CLI turns these into exit code 1 and reports anything else as unexpected.
"""

from typing import Any, Mapping, Optional


class OntoguardError(Exception):
    """Base exception for all ontoguard errors.

    ``details`` holds the structured context (path, key, record) that is
    appended to the message and reported as-is in JSON output.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = {key: str(value) for key, value in (details or {}).items()}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": dict(self.details),
        }
