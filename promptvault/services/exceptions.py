"""Errors raised by the version engine and the prompt store."""


class NotFound(Exception):
    """A prompt or version does not exist, or the version belongs to another prompt."""

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


class StorageFailure(Exception):
    """The unit of work could not commit and was rolled back.

    Safe to retry; nothing from the failed call is visible. The underlying
    database error is kept as ``__cause__``.
    """


class DuplicateName(Exception):
    """Another tag in the same vault already has this name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A tag named {name!r} already exists")
