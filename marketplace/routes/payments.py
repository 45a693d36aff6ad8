"""
Payments blueprint
Stripe payment intents for booked jobs
"""
from flask import Blueprint, jsonify
from flask_login import login_required

from marketplace.core import current_principal
from marketplace.core.payments import initiate_payment
from marketplace.extensions import limiter
from marketplace.utils.payload import json_body

payments_bp = Blueprint('payments', __name__)


@payments_bp.route('/create-payment-intent', methods=['POST'])
@limiter.limit('10 per minute')
@login_required
def create_payment_intent():
    """
    Create a Stripe PaymentIntent for one of the caller's bookings

    POST /api/create-payment-intent
    Body: {
        "booking_id": "uuid"
    }
    The charged amount is the booking's stored total_price; an "amount"
    in the body is ignored.
    """
    data = json_body()
    result = initiate_payment(data.get('booking_id'), current_principal())

    return jsonify({
        'client_secret': result.client_secret,
        'payment_intent_id': result.payment.stripe_payment_intent_id,
        'payment': result.payment.to_dict()
    }), 200
