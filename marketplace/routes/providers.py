"""
Provider blueprint
Profile setup, own services and incoming bookings for providers
"""
from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from marketplace.core import current_principal, lifecycle, projections
from marketplace.errors import NotFound
from marketplace.utils.payload import json_body

providers_bp = Blueprint('providers', __name__)


def _require_profile():
    profile_id = current_principal().profile_id
    if profile_id is None:
        raise NotFound('Provider profile not found')
    return profile_id


@providers_bp.route('/profile', methods=['GET'])
@login_required
def get_profile():
    """
    Get the caller's provider profile

    GET /api/provider/profile
    """
    profile = projections.find_profile_for_user(current_user.id)
    if profile is None:
        raise NotFound('Profile not found')
    return jsonify(profile.to_dict()), 200


@providers_bp.route('/profile', methods=['POST'])
@login_required
def create_profile():
    """
    Create the caller's provider profile

    POST /api/provider/profile
    Body: {
        "bio": "Licensed plumber serving the east side",
        "phone": "555-123-4567",
        "location": "Springfield",
        "years_experience": "10+"
    }
    """
    profile = lifecycle.create_provider_profile(json_body(), current_user)
    return jsonify(profile.to_dict()), 201


@providers_bp.route('/services', methods=['GET'])
@login_required
def list_own_services():
    """
    List the caller's services, newest first

    GET /api/provider/services
    """
    services = projections.list_provider_services(_require_profile())
    return jsonify([service.to_dict() for service in services]), 200


@providers_bp.route('/services', methods=['POST'])
@login_required
def create_own_service():
    """
    Publish a service; same contract as POST /api/services

    POST /api/provider/services
    """
    service = lifecycle.create_service(json_body(), current_principal())
    return jsonify(service.to_dict()), 201


@providers_bp.route('/bookings', methods=['GET'])
@login_required
def list_incoming_bookings():
    """
    List bookings made against the caller's profile, newest first

    GET /api/provider/bookings
    """
    views = projections.list_provider_bookings(_require_profile())
    return jsonify([view.to_dict() for view in views]), 200
