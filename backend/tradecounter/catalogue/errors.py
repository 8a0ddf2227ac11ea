"""Catalogue session error taxonomy."""


class CatalogueError(Exception):
    """Base class for everything the catalogue core raises."""


class CatalogueLoadError(CatalogueError):
    """A lookup or product query against the store failed."""

    def __init__(self, resource: str, reason: str):
        self.resource = resource
        self.reason = reason
        super().__init__(f"Failed to load {resource}: {reason}")


class InvalidQuantityError(CatalogueError, ValueError):
    def __init__(self, quantity: object):
        self.quantity = quantity
        super().__init__(f"Quantity must be a positive whole number, got {quantity!r}")


class SubmissionError(CatalogueError):
    """The enquiry or contact endpoint rejected the request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class SubmissionInProgressError(CatalogueError):
    """A submission of the same cart is already in flight."""


class ContactValidationError(CatalogueError):
    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__(", ".join(f"{field}: {msg}" for field, msg in errors.items()))


class EmptyCartError(CatalogueError):
    def __init__(self):
        super().__init__("The enquiry list is empty")


class UnknownSelectionError(CatalogueError, ValueError):
    """A category or brand selector that is neither "all", an id, nor a known name."""

    def __init__(self, kind: str, value: object):
        self.kind = kind
        self.value = value
        super().__init__(f"Unknown {kind} {value!r}")
