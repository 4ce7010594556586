from typing import Dict, List

from chalice import Response

from chalicelib.base_class_resource import ResourceBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app, data as utils_data, exceptions
from chalicelib.utils.logger import logger
from chalicelib.utils.payment_gateway import DEFAULT_CURRENCY


def get_cart_item_ids(payment: Dict) -> List[str]:
    cart_item_ids = payment.get('cartItems', [])
    if not isinstance(cart_item_ids, list) or not all(isinstance(id_, str) for id_ in cart_item_ids):
        raise exceptions.ValidationException('cartItems must be a list of cart item ids')
    return cart_item_ids


class Payment(ResourceBase):
    collection_name = keys_structure.payments_collection

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_app.log_start_finish
    def endpoint_create_payment_intent(self) -> Response:
        amount = utils_data.to_cents(self._request_body().get('price'))
        client_secret = self.context.payment_gateway.create_payment_intent(amount=amount, currency=DEFAULT_CURRENCY)
        return Response(status_code=http200, body={'clientSecret': client_secret},
                        headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_record_payment(self) -> Response:
        """
        Records the payment, then removes the paid cart items.
        The two steps are not atomic: if clearing the cart fails the payment stays recorded.
        """
        payment = self._request_body()
        cart_item_ids = get_cart_item_ids(payment)
        result = self.collection.insert_one(payment)
        try:
            clear_cart = self.context.store.carts.delete_many({'id': {'$in': cart_item_ids}})
        except Exception:
            logger.error(f"endpoint_record_payment ::: payment id={result['insertedId']} recorded "
                         f"but cart items {cart_item_ids} were not cleared")
            raise
        return Response(status_code=http200, body={'result': result, 'clearCart': clear_cart},
                        headers=utils_app.response_headers())

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_app.log_start_finish
    def endpoint_get_payments(self) -> Response:
        return Response(status_code=http200, body=self.collection.find(), headers=utils_app.response_headers())
