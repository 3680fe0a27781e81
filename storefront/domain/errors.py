# storefront/domain/errors.py


class StorefrontError(Exception):
    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(StorefrontError):
    status_code = 404
    error = "Not Found"

    def __init__(self, resource: str, field: str, value):
        super().__init__(f"{resource} not found with {field}: {value}")
        self.resource = resource


class InvalidInputError(StorefrontError):
    status_code = 400
    error = "Bad Request"


class ConflictingStateError(StorefrontError):
    status_code = 409
    error = "Conflict"


class AccessDeniedError(StorefrontError, PermissionError):
    status_code = 403
    error = "Access Denied"

    def __init__(self, message: str = "You don't have permission to access this resource"):
        super().__init__(message)
