from storefront_admin.clients.admin_api.errors import ApiError


class ErrorMapper:
    _KNOWN_CODES = {
        "TIMEOUT_ERROR": ("The server took too long to respond.", "Press 'Retry' to run the same request again."),
        "NETWORK_ERROR": ("The admin API is unreachable.", "Check your network connection and retry."),
        "MALFORMED_RESPONSE": ("The server returned an unexpected response.", "Retry; report the trace_id if it persists."),
    }

    _STATUS_HINTS = {
        401: ("UNAUTHORIZED", "Your session has expired.", "Sign in again."),
        403: ("PERMISSION_DENIED", "You are not allowed to view this list.", "Ask an administrator for access."),
        422: ("VALIDATION_ERROR", "The list request was rejected.", "Check the selected filters."),
        500: ("INTERNAL_ERROR", "The server failed to load the list.", "Retry; report the trace_id if it persists."),
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
                "server_message": error.server_message,
                "details": error.details,
                "trace_id": error.trace_id,
                "status_code": error.status_code,
                "suggestion": suggestion,
            }
        return {
            "code": "INTERNAL_ERROR",
            "message": str(error),
            "server_message": None,
            "details": None,
            "trace_id": None,
            "status_code": None,
            "suggestion": "Retry and report the incident if it persists.",
        }
