"""Error kinds raised by the therapist API and the HTTP status each maps to."""

from django.http import JsonResponse


class TherapistAPIError(Exception):
    """Base error; carries the HTTP status used when it reaches a view."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self):
        return error_response(self.message, status=self.status_code)


class Unauthenticated(TherapistAPIError):
    status_code = 401
    default_message = "Not authenticated"


class NotFound(TherapistAPIError):
    status_code = 404
    default_message = "Not found"


class ValidationFailure(TherapistAPIError):
    status_code = 400
    default_message = "Invalid input"


class StoreFailure(TherapistAPIError):
    status_code = 500
    default_message = "Database error"


def error_response(message, status=500):
    return JsonResponse({"error": message}, status=status)


def form_errors_message(form):
    """Flatten Django form errors into a single readable message"""
    parts = []
    for field, errors in form.errors.items():
        label = "form" if field == "__all__" else field
        parts.append(f"{label}: {errors[0]}")
    return "; ".join(parts)
