"""
Users blueprint
Onboarding choice between customer and provider
"""
from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from marketplace.core import lifecycle
from marketplace.utils.payload import json_body

users_bp = Blueprint('users', __name__)


@users_bp.route('/type', methods=['POST'])
@login_required
def set_user_type():
    """
    Set the caller's role

    POST /api/user/type
    Body: {
        "user_type": "customer" | "provider"
    }
    """
    data = json_body()
    user = lifecycle.set_role(current_user, data.get('user_type'))
    return jsonify(user.to_dict()), 200
