from chalice import Response

from chalicelib.base_class_resource import ResourceBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.utils import app as utils_app


class Review(ResourceBase):
    collection_name = keys_structure.reviews_collection

    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_get_reviews(self) -> Response:
        return Response(status_code=http200, body=self.collection.find(), headers=utils_app.response_headers())
