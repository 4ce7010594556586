from decimal import Decimal

from chalice import Response

from chalicelib.base_class_resource import ResourceBase
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app, data as utils_data


class AdminStats(ResourceBase):

    @utils_app.request_exception_handler
    @utils_auth.authenticate
    @utils_auth.admin_only
    @utils_app.log_start_finish
    def endpoint_get_stats(self) -> Response:
        store = self.context.store
        payments = store.payments.find()
        revenue = sum((utils_data.to_number(payment.get('price')) for payment in payments), Decimal(0))
        body = {
            'users': store.users.count(),
            'products': store.menu.count(),
            'orders': store.payments.count(),
            'revenue': utils_data.to_response_number(revenue)
        }
        return Response(status_code=http200, body=body, headers=utils_app.response_headers())
