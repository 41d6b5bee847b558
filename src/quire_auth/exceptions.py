"""Authentication exceptions.

These exceptions are raised by the quire_auth package and are translated
into 401/403/503 responses by the API layer. Token failures carry a
``kind`` for logging; clients only ever see a generic message.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class AuthenticationRequiredError(AuthError):
    """Raised when a protected route is called without any access token."""

    kind = "missing"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class TokenError(AuthError):
    """Base class for session token verification failures."""

    kind = "invalid"

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenExpiredError(TokenError):
    """The token was valid once but its expiry has passed."""

    kind = "expired"

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class TokenInvalidError(TokenError):
    """Bad signature, undecodable structure, wrong type, or a reused/revoked token."""

    kind = "invalid"

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenMalformedError(TokenError):
    """The signature checks out but required claims are missing or unparseable."""

    kind = "malformed"

    def __init__(self, message: str = "Malformed token payload"):
        super().__init__(message)


class AuthorizationDeniedError(AuthError):
    """Raised when an authenticated caller's role is below the required one."""

    def __init__(self, required_role: str, actual_role: str):
        self.required_role = required_role
        self.actual_role = actual_role
        super().__init__(f"{required_role.capitalize()} access required")


class CryptoError(AuthError):
    """The signing key is unavailable. Fatal; never retried."""

    def __init__(self, message: str = "Token signing key is unavailable"):
        super().__init__(message)
