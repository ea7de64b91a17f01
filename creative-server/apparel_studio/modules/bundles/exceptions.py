"""Bundle domain specific exceptions."""


class BundleError(Exception):
    """Raised when an archive cannot be serialised or handed to its delivery target.

    Individual asset download failures never raise; they are logged and skipped.
    """
