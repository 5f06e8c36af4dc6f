"""Exception hierarchy for the storefront client.

Field validation problems are not exceptions: they are reported as a
field → message mapping by ``storefront.domain.validation``.
"""


class StorefrontError(Exception):
    """Base class for every failure raised by this package."""


class HttpError(StorefrontError):
    """Transport failure or non-2xx response from the storefront API.

    ``status`` is ``None`` when no response was received at all.
    """

    def __init__(self, message: str, status: int | None = None):
        self.message = message
        self.status = status
        super().__init__(message)


class ZoneError(StorefrontError):
    """The delivery zone for a checkout attempt could not be determined."""


class ZoneNotFound(ZoneError):
    """No zone in the directory has the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Selected zone not found in zones data: {name!r}")


class ZoneFetchError(ZoneError):
    """The zone directory itself could not be fetched."""


class OrderSubmitError(StorefrontError):
    """The order API rejected the order or could not be reached."""

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)
