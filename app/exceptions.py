"""Error kinds raised by the catalog services.

Routes translate these into HTTP responses (see ``app.main``); services
never retry on any of them.
"""


class CatalogError(Exception):
    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogError):
    status_code = 404
    error = "Not Found"


class ConflictError(CatalogError):
    status_code = 409
    error = "Conflict"


class InvalidArgumentError(CatalogError):
    status_code = 400
    error = "Bad Request"


class UnexpectedError(CatalogError):
    """Store or other unclassified failure. The message is safe to show to
    end users; the original exception is kept as ``__cause__`` for logs."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)
