class ExportError(Exception):
    """Raised when an export has nothing to write or cannot be written."""
