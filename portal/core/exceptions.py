# /portal/core/exceptions.py

"""
Domain exceptions raised by the service layer.

Services otherwise use the built-in `ValueError` (validation) and
`PermissionError` (authorization) the same way the API layer expects them;
the classes below cover the remaining failure families and are translated to
HTTP responses by the handlers registered in `main.py`.
"""


class RecordNotFoundError(LookupError):
    """A record does not exist or is hidden from the caller."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} with ID {record_id} not found")


class StorageError(RuntimeError):
    """The object store rejected an upload or delete."""


class AssistantUnavailableError(RuntimeError):
    """The generative assistant is not configured or did not answer."""
