"""Errors raised while building JSON:API response documents."""


class DocumentError(ValueError):
    """Base class for input that cannot be turned into a JSON:API document."""

    message = "Invalid document input"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidTypeError(DocumentError):
    message = "Invalid type provided: type must be a non-empty string"


class MissingIdError(DocumentError):
    message = (
        "Invalid obj: object must have an id property in order to be "
        "transformed into a JSONAPIResponse"
    )


class MissingRelationshipTypeError(DocumentError):
    message = "Each relationship object must have a 'type' attribute"


class MissingRelationshipTypeInArrayError(DocumentError):
    message = (
        "Each relationship object in the array of 'relationships' must have "
        "a 'type' attribute"
    )


class CyclicRelationshipError(DocumentError):
    message = "Relationship objects must not reference one of their ancestors"
