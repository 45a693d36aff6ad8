"""
Request payload helpers
"""
from flask import request

from marketplace.errors import ValidationError


def json_body():
    """
    Return the JSON request body as a dict

    Raises:
        ValidationError: Body is not a JSON object
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
