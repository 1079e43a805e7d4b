from hr_console.app.export.errors import ExportError
from hr_console.clients.hr_client_sdk.errors import ApiError


class ErrorMapper:
    _KNOWN_CODES = {
        "PERMISSION_DENIED": ("Permission denied for this operation.", "Ask an administrator for access."),
        "UNAUTHORIZED": ("Your session is not valid.", "Log in again."),
        "NOT_FOUND": ("The record no longer exists.", "Refresh the listing."),
        "VALIDATION_ERROR": ("The request did not pass validation.", "Review the required fields and formats."),
        "NETWORK_ERROR": ("The HR API is unreachable.", "Check the network and try again."),
        "INTERNAL_ERROR": ("Internal or transient failure.", "Try again in a few seconds."),
    }

    _STATUS_HINTS = {
        401: ("UNAUTHORIZED", "Your session is not valid.", "Log in again."),
        403: ("PERMISSION_DENIED", "Permission denied for this operation.", "Ask an administrator for access."),
        404: ("NOT_FOUND", "The record no longer exists.", "Refresh the listing."),
        422: ("VALIDATION_ERROR", "The request did not pass validation.", "Review the submitted fields."),
        500: ("INTERNAL_ERROR", "The HR API failed.", "Retry and share the trace_id if it persists."),
    }

    @classmethod
    def to_payload(cls, error: Exception) -> dict:
        if isinstance(error, ApiError):
            status_code = error.status_code or -1
            mapped = cls._STATUS_HINTS.get(status_code)
            if mapped is None and status_code >= 500:
                mapped = cls._STATUS_HINTS[500]
            if mapped is not None:
                code, message, suggestion = mapped
            else:
                message, suggestion = cls._KNOWN_CODES.get(
                    error.code,
                    (error.message, "Contact support with the trace_id."),
                )
                code = error.code
            return {
                "code": code,
                "message": message,
                "details": error.details,
                "trace_id": error.trace_id,
                "suggestion": suggestion,
            }
        if isinstance(error, ExportError):
            return {
                "code": "EXPORT_ERROR",
                "message": str(error),
                "details": None,
                "trace_id": None,
                "suggestion": "Adjust the period or filters and export again.",
            }
        return {
            "code": "INTERNAL_ERROR",
            "message": str(error),
            "details": None,
            "trace_id": None,
            "suggestion": "Retry and report the incident if it persists.",
        }
