# Fixture exceptions.


class FixtureError(Exception):
    """Base exception for all fixture errors."""

    pass


class ApiResponseError(FixtureError):
    """Raised when the service under test answers with a non-2xx status."""

    def __init__(self, *args, status_code: int, detail: str | None = None):
        super().__init__(*args)
        self.status_code = status_code
        # Use the first arg as detail if detail kwarg is not provided and args exist
        self.detail = detail or (args[0] if args else None)

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500


class NoTokenError(FixtureError):
    """Raised when a token source cannot produce a bearer token."""

    pass
