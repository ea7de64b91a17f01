"""Order domain specific exceptions."""


class OrderError(Exception):
    """Base class for order related domain errors."""


class OrderNotFoundError(OrderError):
    """Raised when the requested order could not be found."""


class OrderOwnershipError(OrderError):
    """Raised when an order does not belong to the acting customer."""


class OrderTransitionError(OrderError):
    """Raised when a status change is not allowed from the current status."""
