"""
Services blueprint
Public catalogue plus service publishing for providers
"""
from flask import Blueprint, jsonify
from flask_login import login_required

from marketplace.core import current_principal, lifecycle, projections
from marketplace.errors import NotFound
from marketplace.models import SERVICE_CATEGORIES
from marketplace.utils.payload import json_body

services_bp = Blueprint('services', __name__)


@services_bp.route('', methods=['GET'])
def list_services():
    """
    List all services with their provider, newest first

    GET /api/services
    """
    return jsonify([view.to_dict() for view in projections.list_services()]), 200


@services_bp.route('/categories', methods=['GET'])
def list_categories():
    """GET /api/services/categories"""
    return jsonify(list(SERVICE_CATEGORIES)), 200


@services_bp.route('/<service_id>', methods=['GET'])
def get_service(service_id):
    """
    Get a service with its provider

    GET /api/services/<id>
    """
    view = projections.get_service(service_id)
    if view is None:
        raise NotFound('Service not found')
    return jsonify(view.to_dict()), 200


@services_bp.route('', methods=['POST'])
@login_required
def create_service():
    """
    Publish a service for the caller's provider profile

    POST /api/services
    Body: {
        "category": "Plumbing",
        "title": "Leak repair",
        "description": "Fix leaking taps and pipes",
        "price_per_hour": "50.00",
        "image_url": "https://example.com/leak.jpg"
    }
    Any provider_id in the body is ignored.
    """
    service = lifecycle.create_service(json_body(), current_principal())
    return jsonify(service.to_dict()), 201
