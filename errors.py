class AppError(Exception):
    """Base error carrying the HTTP status it should surface with."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class AuthError(AppError):
    status_code = 401


class CsvParseError(AppError):
    """Raised when an uploaded statement cannot be read as CSV at all."""

    status_code = 400

    def __init__(self, message: str, line: int | None = None):
        if line is not None:
            message = f"Malformed CSV at line {line}: {message}"
        super().__init__(message)
        self.line = line
