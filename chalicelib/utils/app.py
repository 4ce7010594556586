import functools
from typing import Callable

from chalice import Response

from chalicelib.constants import messages, status_codes
from chalicelib.utils.exceptions import (NotAuthorizedException, AccessDenied, SelfAccessDenied, ValidationException,
                                         DuplicateRecord, PaymentError)
from chalicelib.utils.logger import logger, log_exception


def response_headers(content_type: str = 'application/json') -> dict:
    return {'Content-Type': content_type, 'X-Request-Id': str(getattr(logger, 'current_request_id'))}


def error_response(error: Exception, message: str, msg: str = "", status_code: int = 400, *args, **kwargs):
    log_exception(error=error, msg=msg, status_code=status_code, *args, **kwargs)
    return Response(
        body={
            'error': True,
            'message': message
        },
        status_code=status_code,
        headers=response_headers()
    )


def request_exception_handler(func: Callable):
    @functools.wraps(func)
    def result(*args, **kwargs):
        try:
            logger.info(f'Calling function {func.__name__}')
            return func(*args, **kwargs)
        except NotAuthorizedException as not_authorized:
            return error_response(
                error=not_authorized,
                message=messages.UNAUTHORIZED_ACCESS,
                msg=f'function = {func.__name__} , error = {not_authorized}',
                status_code=status_codes.http401)
        except SelfAccessDenied as self_access_denied:
            return error_response(
                error=self_access_denied,
                message=messages.FORBIDDEN_ACCESS,
                msg=f'function = {func.__name__} , error = {self_access_denied}',
                status_code=status_codes.http401)
        except AccessDenied as access_denied:
            return error_response(
                error=access_denied,
                message=messages.FORBIDDEN_ACCESS,
                msg=f'function = {func.__name__} , error = {access_denied}',
                status_code=status_codes.http403)
        except ValidationException as validation_error:
            return error_response(
                error=validation_error,
                message=str(validation_error),
                msg=f'function = {func.__name__} , error = {validation_error}',
                status_code=status_codes.http400)
        except DuplicateRecord as duplicate_record:
            return error_response(
                error=duplicate_record,
                message=str(duplicate_record),
                msg=f'function = {func.__name__} , error = {duplicate_record}',
                status_code=status_codes.http409)
        except PaymentError as payment_error:
            return error_response(
                error=payment_error,
                message=messages.PAYMENT_SERVICE_ERROR,
                msg=f'function = {func.__name__} , error = {payment_error}, code = {payment_error.code}',
                status_code=status_codes.http502)
        except Exception as exception:
            return error_response(
                error=exception,
                message=messages.INTERNAL_SERVER_ERROR,
                msg=f'function = {func.__name__}, error = {exception}',
                status_code=status_codes.http500)
    return result


def log_start_finish(func: Callable):
    @functools.wraps(func)
    def result(*args, **kwargs):
        logger.info(f'{func.__name__} ::: started')
        response = func(*args, **kwargs)
        logger.info(f'{func.__name__} ::: finished')
        return response
    return result
