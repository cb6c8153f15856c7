class BackendError(Exception):
    """A database call failed (constraint violation, lost connection...)."""


class UploadError(Exception):
    """Storing an uploaded file failed."""
