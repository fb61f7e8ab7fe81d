class HomecareError(Exception):
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class Unauthenticated(HomecareError):
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class TokenMalformed(Unauthenticated):
    """Token could not be parsed or its signature does not match."""


class TokenExpired(Unauthenticated):
    """Token signature is valid but its expiry has passed."""


class Forbidden(HomecareError):
    status_code = 403


class NotFound(HomecareError):
    status_code = 404


class Conflict(HomecareError):
    status_code = 409


class Invalid(HomecareError):
    status_code = 400
