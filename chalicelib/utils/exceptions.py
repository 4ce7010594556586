__all__ = ["NotAuthorizedException", "AccessDenied", "SelfAccessDenied", "RecordNotFound", "DuplicateRecord",
           "NumberOfRetriesExceeded", "ValidationException", "InvalidToken", "PaymentError", "ConfigurationError"]


# Authentication / authorization exceptions
class NotAuthorizedException(Exception):
    LEVEL = 'warning'


class AccessDenied(Exception):
    LEVEL = 'warning'


class SelfAccessDenied(AccessDenied):
    """
    Authenticated caller asked for a resource that belongs to another email
    """
    pass


class InvalidToken(Exception):
    LEVEL = 'warning'


# DynamoDB exceptions
class RecordNotFound(Exception):
    pass


class DuplicateRecord(Exception):
    LEVEL = 'warning'


# DB Performance Exception
class NumberOfRetriesExceeded(Exception):
    pass


# Validations exceptions
class ValidationException(Exception):
    LEVEL = 'warning'


# Upstream exceptions
class PaymentError(Exception):

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigurationError(Exception):
    pass
