"""
Authentication blueprint
Exchanges identity-provider tokens for a session and exposes the current user
"""
import logging

from flask import Blueprint, jsonify
from flask_login import current_user, login_required, login_user, logout_user

from marketplace.core.identity import InvalidIdentityToken, upsert_user, verify_identity_token
from marketplace.errors import ValidationError
from marketplace.utils.payload import json_body

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Start a session from an identity-provider token

    POST /api/login
    Body: {
        "id_token": "<signed token from the identity provider>"
    }
    """
    data = json_body()
    token = data.get('id_token')
    if not token or not isinstance(token, str):
        raise ValidationError('id_token is required')

    try:
        claims = verify_identity_token(token)
    except InvalidIdentityToken as e:
        return jsonify({'error': str(e)}), 401

    user = upsert_user(claims)
    login_user(user, remember=True)

    return jsonify({
        'message': 'Login successful',
        'user': user.to_dict()
    }), 200


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """
    Logout user

    POST /api/logout
    """
    logout_user()
    return jsonify({'message': 'Logout successful'}), 200


@auth_bp.route('/auth/user', methods=['GET'])
@login_required
def get_current_user():
    """
    Get current authenticated user

    GET /api/auth/user
    """
    return jsonify(current_user.to_dict()), 200
