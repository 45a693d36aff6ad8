"""
Bookings blueprint
Customer bookings, booking detail and provider status updates
"""
from flask import Blueprint, jsonify
from flask_login import login_required

from marketplace.core import Action, current_principal, ensure, lifecycle, projections
from marketplace.errors import NotFound
from marketplace.utils.payload import json_body

bookings_bp = Blueprint('bookings', __name__)


@bookings_bp.route('', methods=['GET'])
@login_required
def list_my_bookings():
    """
    List the caller's bookings as a customer, newest first

    GET /api/bookings
    Providers are refused here and use /api/provider/bookings instead.
    """
    principal = current_principal()
    ensure(principal, Action.LIST_CUSTOMER_BOOKINGS)

    views = projections.list_customer_bookings(principal.user_id)
    return jsonify([view.to_dict() for view in views]), 200


@bookings_bp.route('/<booking_id>', methods=['GET'])
@login_required
def get_booking(booking_id):
    """
    Get a booking the caller is party to

    GET /api/bookings/<id>
    """
    view = projections.get_booking(booking_id)
    if view is None:
        raise NotFound('Booking not found')

    ensure(current_principal(), Action.VIEW_BOOKING, view)
    return jsonify(view.to_dict()), 200


@bookings_bp.route('', methods=['POST'])
@login_required
def create_booking():
    """
    Book a service

    POST /api/bookings
    Body: {
        "service_id": "uuid",
        "scheduled_date": "2026-03-15T09:00:00Z",
        "estimated_hours": "2",
        "address": "12 Elm St",
        "notes": "Side gate is open"
    }
    customer_id, provider_id and total_price are derived server-side.
    """
    booking = lifecycle.create_booking(json_body(), current_principal())
    return jsonify(booking.to_dict()), 201


@bookings_bp.route('/<booking_id>', methods=['PATCH'])
@login_required
def update_booking_status(booking_id):
    """
    Change a booking's status as its provider

    PATCH /api/bookings/<id>
    Body: {
        "status": "accepted" | "completed" | "cancelled"
    }
    """
    data = json_body()

    booking = projections.find_booking(booking_id)
    if booking is None:
        raise NotFound('Booking not found')

    booking = lifecycle.transition(booking, data.get('status'), current_principal())
    return jsonify(booking.to_dict()), 200
