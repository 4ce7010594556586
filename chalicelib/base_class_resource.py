from typing import Dict, Optional

from chalice.app import Request

from chalicelib.context import ServiceContext, get_context
from chalicelib.utils import data as utils_data
from chalicelib.utils.logger import bind_request_id, log_request


class ResourceBase:
    """
    Base of every resource handler.
    Holds the current request and the shared service context, endpoint methods
    are decorated with the auth gates from chalicelib.utils.auth
    """
    collection_name = None

    def __init__(self, request: Request, context: ServiceContext = None):
        self.request = request
        self._context = context
        self.claims: Optional[Dict] = None
        self.request_id = bind_request_id(request)
        log_request(request)

    @classmethod
    def init_endpoint(cls, request: Request, context: ServiceContext = None):
        return cls(request, context)

    @property
    def context(self) -> ServiceContext:
        """
        Resolved on first use, so configuration errors surface inside the endpoint error handling
        """
        if self._context is None:
            self._context = get_context()
        return self._context

    @property
    def collection(self):
        return getattr(self.context.store, self.collection_name)

    def _request_body(self) -> Dict:
        return utils_data.parse_raw_body(self.request)

    def _query_param(self, name: str) -> Optional[str]:
        return (self.request.query_params or {}).get(name)

    def _caller_email(self) -> Optional[str]:
        return (self.claims or {}).get('email')
