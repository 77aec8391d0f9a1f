"""
Error taxonomy for account operations.

Services raise these; ``edutrack.main`` renders them as
``{"success": false, "message": ...}`` with the matching HTTP status.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request parameters."


class AuthError(AppError):
    status_code = 401
    default_message = "Invalid credentials or account not found."


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Action not allowed."


class NotFoundError(AppError):
    status_code = 404
    default_message = "Account not found."


class ConflictError(AppError):
    status_code = 409
    default_message = "This email is already registered."


class StoreError(AppError):
    status_code = 500
    default_message = "Server failed to process the request."
