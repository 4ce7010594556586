import functools
from typing import Callable, Optional

from chalice.app import Request

from chalicelib.utils import exceptions as utils_exceptions
from chalicelib.utils.logger import logger
from chalicelib.utils.tokens import verify_token


def get_bearer_token(request: Request) -> Optional[str]:
    """
    Token is the second space-delimited field of `Authorization: <scheme> <token>`,
    the scheme itself is not checked
    """
    authorization = request.headers.get('authorization')
    if not authorization:
        return None
    parts = authorization.split(' ')
    return parts[1] if len(parts) > 1 else ''


def is_admin(users_collection, email: Optional[str]) -> bool:
    """
    Role is read from the stored user on every call, never from the token
    """
    if not email:
        return False
    user = users_collection.find_one({'email': email})
    return bool(user and user.get('admin'))


def authenticate(func: Callable):
    """
    Wrapper for resource methods which require user's authentication
    """

    @functools.wraps(func)
    def result_auth(instance, *args, **kwargs):
        token = get_bearer_token(instance.request)
        if token is None:
            raise utils_exceptions.NotAuthorizedException('authorization header is missing')
        try:
            claims = verify_token(token, instance.context.token_secret)
        except utils_exceptions.InvalidToken as error:
            raise utils_exceptions.NotAuthorizedException(str(error)) from error
        setattr(instance.request, 'auth_result', claims)
        instance.claims = claims
        logger.info(f"authenticate ::: SUCCESS, email={claims.get('email')}, func.__name__ {func.__name__}")
        return func(instance, *args, **kwargs)

    return result_auth


def admin_only(func: Callable):
    """
    Wrapper for resource methods available to admins only, must be applied after `authenticate`
    """

    @functools.wraps(func)
    def result_admin(instance, *args, **kwargs):
        email = (instance.claims or {}).get('email')
        if not is_admin(instance.context.store.users, email):
            raise utils_exceptions.AccessDenied(f'{email=} is not an admin')
        logger.info(f'admin_only ::: SUCCESS, {email=}')
        return func(instance, *args, **kwargs)

    return result_admin
