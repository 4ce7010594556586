UNAUTHORIZED_ACCESS = 'unauthorized access'
FORBIDDEN_ACCESS = 'forbidden access'
INTERNAL_SERVER_ERROR = 'internal server error'
PAYMENT_SERVICE_ERROR = 'payment service error'
