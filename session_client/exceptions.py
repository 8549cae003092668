"""Session client exceptions."""


class AuthException(Exception):
    """Base auth exception with an error code and HTTP-like status."""

    code = "auth_error"

    def __init__(self, message: str, code: str | None = None, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        if code:
            self.code = code


class BackendError(AuthException):
    """A call into the hosted auth SDK failed."""

    code = "backend_error"


class FunctionsError(AuthException):
    """An edge function answered with a non-2xx status."""

    code = "functions_error"


class ConfigurationError(AuthException):
    code = "invalid_config"

    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class UserNotFound(AuthException):
    code = "user_not_found"

    def __init__(self, message: str = "user_not_found"):
        super().__init__(message, status_code=404)


class NotAuthenticated(AuthException):
    code = "not_authenticated"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, status_code=401)


class PasskeyUnsupported(AuthException):
    code = "passkey_unsupported"


class PasskeyAuthenticationFailed(AuthException):
    code = "auth_failed"

    def __init__(self, message: str = "auth_failed"):
        super().__init__(message, status_code=401)


class RedirectError(AuthException):
    """A redirect or one-time link could not be turned into a session."""

    code = "exchange_failed"
