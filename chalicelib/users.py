from chalice import Response

from chalicelib.base_class_resource import ResourceBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app, exceptions
from chalicelib.utils.logger import logger


class User(ResourceBase):
    collection_name = keys_structure.users_collection

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_app.log_start_finish
    def endpoint_check_admin(self, email: str) -> Response:
        if email != self._caller_email():
            raise exceptions.NotAuthorizedException(f'token email does not match {email=}')
        user = self.collection.find_one({'email': email})
        return Response(status_code=http200, body={'admin': bool(user and user.get('admin'))},
                        headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_auth.admin_only
    @utils_app.log_start_finish
    def endpoint_set_admin(self, user_id: str) -> Response:
        admin = self._request_body().get('admin')
        if not isinstance(admin, bool):
            raise exceptions.ValidationException('admin must be a boolean')
        result = self.collection.update_one({'id': user_id}, {'$set': {'admin': admin}})
        logger.info(f'endpoint_set_admin ::: {user_id=} {admin=} by {self._caller_email()}')
        return Response(status_code=http200, body=result, headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_auth.admin_only
    @utils_app.log_start_finish
    def endpoint_get_users(self) -> Response:
        return Response(status_code=http200, body=self.collection.find(), headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_auth.admin_only
    @utils_app.log_start_finish
    def endpoint_delete_user(self, user_id: str) -> Response:
        result = self.collection.delete_one({'id': user_id})
        return Response(status_code=http200, body=result, headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_register_user(self) -> Response:
        """
        Registration is idempotent by email: an existing email is reported, not duplicated.
        The admin flag can't be set on registration.
        """
        user = self._request_body()
        email = user.get('email')
        if not isinstance(email, str) or not email:
            raise exceptions.ValidationException('email is required')
        if self.collection.find_one({'email': email}) is not None:
            logger.info(f'endpoint_register_user ::: {email=} already registered')
            return Response(status_code=http200, body={'userExist': True}, headers=utils_app.response_headers())
        user.pop('admin', None)
        result = self.collection.insert_one(user)
        return Response(status_code=http200, body=result, headers=utils_app.response_headers())
