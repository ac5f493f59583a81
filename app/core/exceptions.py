class AttributionError(Exception):
    """Base class for all attribution domain exceptions.

    Every custom exception in this module inherits from here so that a
    single ``except AttributionError`` clause can catch any domain
    error.
    """

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(detail)


class CookieWriteError(AttributionError):
    """Raised when attribution cookies cannot be written to the response.

    Typical causes are a response that has already been committed or a
    cookie value the framework refuses to serialise.  Nothing is
    written when this is raised.
    """

    def __init__(self, detail: str = "Unable to write attribution cookies"):
        super().__init__(detail)


class AttributionOperationError(AttributionError):
    """Raised at the operation boundary when Set, Get or Clear fails.

    ``detail`` is the operation-level message returned to the client;
    ``reason`` keeps the underlying failure for development responses.
    """

    def __init__(
        self,
        detail: str = "Attribution operation failed",
        reason: str | None = None,
    ):
        self.reason = reason
        super().__init__(detail)
