
class OrderboardError(Exception):
    """Base error; carries the HTTP status the API answers with."""

    status_code = 500

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code

    def to_dict(self):
        return {"error": self.message}


class ValidationError(OrderboardError):
    """Missing or malformed required fields."""

    status_code = 400


class InvalidTransition(ValidationError):
    """Requested status is not reachable from the current one."""

    status_code = 409


class NotFound(OrderboardError):
    status_code = 404


class StoreError(OrderboardError):
    """The database call failed."""

    status_code = 500


class ProviderError(OrderboardError):
    """The payment provider call failed."""

    status_code = 500
