"""Error taxonomy for the URL shortener core."""


class ShortenerError(Exception):
    """Base exception for all shortener errors."""


class InvalidInputError(ShortenerError):
    """Client supplied empty or malformed data."""


class ExhaustedRetriesError(ShortenerError):
    """No free short code was found within the collision retry bound.

    Seeing this means the code space is saturating and the code length or
    alphabet needs enlarging.
    """

    def __init__(self, attempts: int):
        super().__init__(f"Unable to allocate a unique short code after {attempts} attempts")
        self.attempts = attempts


class StoreError(ShortenerError):
    """Base exception for store failures."""


class ConflictError(StoreError):
    """The short code is already taken."""

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' already exists")
        self.short_code = short_code


class NotFoundError(StoreError):
    """No mapping exists for the short code."""

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' not found")
        self.short_code = short_code


class UnavailableError(StoreError):
    """The store could not be reached or did not answer in time."""
