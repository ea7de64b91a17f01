"""Brand domain specific exceptions."""


class BrandError(Exception):
    """Base class for brand related domain errors."""


class BrandNotFoundError(BrandError):
    """Raised when the requested brand could not be found."""


class BrandOwnershipError(BrandError):
    """Raised when a brand does not belong to the acting customer."""
