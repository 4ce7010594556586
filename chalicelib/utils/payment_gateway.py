"""
Stripe integration: creation of PaymentIntents for the checkout page.
"""
import stripe

from chalicelib.utils.exceptions import PaymentError
from chalicelib.utils.logger import logger

DEFAULT_CURRENCY = 'usd'


class StripeGateway:

    def __init__(self, api_key: str):
        self.api_key = api_key

    def create_payment_intent(self, amount: int, currency: str = DEFAULT_CURRENCY) -> str:
        """
        Creates a card PaymentIntent and returns its client secret.

        :param amount: amount in the smallest currency unit (cents)
        :param currency: ISO currency code
        :raises PaymentError: if the Stripe API call fails
        """
        logger.info(f'create_payment_intent ::: {amount=} {currency=}')
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=currency,
                payment_method_types=['card'],
                api_key=self.api_key
            )
        except stripe.StripeError as error:
            raise PaymentError(
                message=str(error.user_message or error),
                code=getattr(error, 'code', None)
            ) from error
        logger.info(f'create_payment_intent ::: SUCCESS, intent_id={intent.id}')
        return intent.client_secret
