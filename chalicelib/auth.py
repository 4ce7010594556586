from chalice import Response

from chalicelib.base_class_resource import ResourceBase
from chalicelib.constants.status_codes import http200
from chalicelib.utils import app as utils_app
from chalicelib.utils.tokens import issue_token


class Token(ResourceBase):

    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_issue_token(self) -> Response:
        """
        Any claims sent by the client are signed as is, the token is returned as plain text
        """
        token = issue_token(self._request_body(), self.context.token_secret)
        return Response(status_code=http200, body=token, headers=utils_app.response_headers('text/plain'))
