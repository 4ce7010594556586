from chalice import Response

from chalicelib.base_class_resource import ResourceBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app, exceptions
from chalicelib.utils.logger import logger


class Cart(ResourceBase):
    collection_name = keys_structure.carts_collection

    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_add_item_to_cart(self) -> Response:
        result = self.collection.insert_one(self._request_body())
        return Response(status_code=http200, body=result, headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_app.log_start_finish
    def endpoint_get_cart(self) -> Response:
        """
        Cart items of the caller, the `email` query parameter must match the token
        """
        email = self._query_param('email')
        if not email:
            return Response(status_code=http200, body=[], headers=utils_app.response_headers())
        if email != self._caller_email():
            raise exceptions.SelfAccessDenied(f'token email does not match {email=}')
        cart_items = self.collection.find({'email': email})
        return Response(status_code=http200, body=cart_items, headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_app.log_start_finish
    def endpoint_remove_item_from_cart(self) -> Response:
        """
        Owner of the cart item or an admin can remove it
        """
        cart_item_id = self._query_param('id')
        if not cart_item_id:
            raise exceptions.ValidationException('id query parameter is required')
        cart_item = self.collection.find_one({'id': cart_item_id})
        caller_email = self._caller_email()
        if cart_item is not None and cart_item.get('email') != caller_email \
                and not utils_auth.is_admin(self.context.store.users, caller_email):
            raise exceptions.AccessDenied(f'{cart_item_id=} does not belong to {caller_email}')
        result = self.collection.delete_one({'id': cart_item_id})
        logger.info(f'endpoint_remove_item_from_cart ::: {cart_item_id=} deleted={result["deletedCount"]}')
        return Response(status_code=http200, body=result, headers=utils_app.response_headers())
