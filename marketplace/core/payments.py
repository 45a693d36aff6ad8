"""
Payment intent bridge.

Turns a booking into a Stripe PaymentIntent and records the local Payment.
The charged amount always comes from the stored booking total.
"""
import logging
from dataclasses import dataclass

import stripe
from flask import current_app

from marketplace.errors import NotFound, Unconfigured, Unexpected, ValidationError
from marketplace.extensions import db
from marketplace.models import BookingStatus, Payment, PaymentStatus
from marketplace.utils import format_currency, to_minor_units
from . import projections
from .access import Action, ensure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentIntent:
    id: str
    client_secret: str


@dataclass(frozen=True)
class PaymentIntentResult:
    client_secret: str
    payment: Payment


class StripeGateway:
    """Thin wrapper over the Stripe PaymentIntent API"""

    def __init__(self, secret_key):
        self.secret_key = secret_key

    @property
    def configured(self):
        return bool(self.secret_key)

    def create_payment_intent(self, amount, currency, metadata):
        """
        Create a PaymentIntent

        Args:
            amount (int): Amount in minor units (cents)
            currency (str): ISO currency code
            metadata (dict): Metadata attached to the intent

        Returns:
            PaymentIntent: Intent id and client secret
        """
        intent = stripe.PaymentIntent.create(
            amount=amount,
            currency=currency,
            metadata=metadata,
            api_key=self.secret_key,
        )
        return PaymentIntent(id=intent.id, client_secret=intent.client_secret)


def get_gateway():
    return current_app.extensions['payment_gateway']


def initiate_payment(booking_id, principal):
    """
    Create a payment intent for the caller's booking

    Raises:
        Unconfigured: No payment processor configured
        ValidationError: Missing booking_id, unpriced, cancelled or already paid booking
        NotFound: Booking does not exist
        Forbidden: Caller is not the booking's customer
        Unexpected: The processor call failed
    """
    gateway = get_gateway()
    if not gateway.configured:
        raise Unconfigured('Payment system not configured')

    if not booking_id:
        raise ValidationError('booking_id is required')
    if not isinstance(booking_id, str):
        raise ValidationError('booking_id must be a string')

    booking = projections.find_booking(booking_id)
    if booking is None:
        raise NotFound('Booking not found')

    ensure(principal, Action.PAY_BOOKING, booking)

    if booking.total_price is None:
        raise ValidationError('Booking has no total price')
    if booking.total_price <= 0:
        raise ValidationError('Booking total must be positive')
    if booking.status == BookingStatus.CANCELLED.value:
        raise ValidationError('Cannot pay for a cancelled booking')

    payment = booking.payment
    if payment is not None and payment.is_settled():
        raise ValidationError('Booking is already paid')

    amount = booking.total_price
    currency = current_app.config.get('PAYMENT_CURRENCY', 'usd')

    try:
        intent = gateway.create_payment_intent(
            amount=to_minor_units(amount),
            currency=currency,
            metadata={'booking_id': booking.id, 'customer_id': principal.user_id},
        )
    except stripe.StripeError as e:
        logger.exception('Stripe error creating payment intent for booking %s', booking.id)
        raise Unexpected('Error creating payment intent') from e

    if payment is None:
        payment = Payment(booking_id=booking.id)
        db.session.add(payment)

    payment.amount = amount
    payment.status = PaymentStatus.PENDING.value
    payment.stripe_payment_intent_id = intent.id
    db.session.commit()

    logger.info(
        'Created payment intent %s for booking %s (%s)',
        intent.id, booking.id, format_currency(amount, currency)
    )
    return PaymentIntentResult(client_secret=intent.client_secret, payment=payment)
