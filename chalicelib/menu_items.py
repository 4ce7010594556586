from chalice import Response

from chalicelib.base_class_resource import ResourceBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app


class MenuItem(ResourceBase):
    collection_name = keys_structure.menu_collection

    # fields replaced by the upsert endpoint
    replaceable_fields = ('name', 'price', 'recipe', 'category', 'image')

    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_get_menu_items(self) -> Response:
        return Response(status_code=http200, body=self.collection.find(), headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_get_menu_item(self, menu_item_id: str) -> Response:
        menu_item = self.collection.find_one({'id': menu_item_id})
        return Response(status_code=http200, body=menu_item, headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_auth.admin_only
    @utils_app.log_start_finish
    def endpoint_delete_menu_item(self, menu_item_id: str) -> Response:
        result = self.collection.delete_one({'id': menu_item_id})
        return Response(status_code=http200, body=result, headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_auth.admin_only
    @utils_app.log_start_finish
    def endpoint_upsert_menu_item(self, menu_item_id: str) -> Response:
        body = self._request_body()
        updated_item = {field: body[field] for field in self.replaceable_fields if field in body}
        result = self.collection.update_one({'id': menu_item_id}, {'$set': updated_item}, upsert=True)
        return Response(status_code=http200, body=result, headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_auth.admin_only
    @utils_app.log_start_finish
    def endpoint_create_menu_item(self) -> Response:
        result = self.collection.insert_one(self._request_body())
        return Response(status_code=http200, body=result, headers=utils_app.response_headers())
