import os
from typing import Optional

from chalicelib.utils import db as utils_db
from chalicelib.utils.exceptions import ConfigurationError
from chalicelib.utils.logger import logger
from chalicelib.utils.payment_gateway import StripeGateway

_CONTEXT = None


def required_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise ConfigurationError(f'environment variable {name} is not set')
    return value


class ServiceContext:
    """
    Process-wide collaborators shared by every request: the document store,
    the payment gateway and the token signing secret
    """

    def __init__(self, store, payment_gateway, token_secret: str):
        self.store = store
        self.payment_gateway = payment_gateway
        self.token_secret = token_secret

    @classmethod
    def from_environ(cls):
        logger.info('ServiceContext ::: initialising from environment')
        return cls(
            store=utils_db.Store(),
            payment_gateway=StripeGateway(api_key=required_env('STRIPE_SECRET_KEY')),
            token_secret=required_env('ACCESS_TOKEN_SECRET')
        )


def get_context() -> ServiceContext:
    global _CONTEXT
    if _CONTEXT is None:
        _CONTEXT = ServiceContext.from_environ()
    return _CONTEXT


def set_context(context: Optional[ServiceContext]) -> None:
    global _CONTEXT
    _CONTEXT = context
