"""
Identity provider adapter.

The identity provider hands the client a signed token; it is verified once at
login, the User is upserted from its claims, and the session cookie carries
the identity afterwards.
"""
import logging

import jwt
from flask import current_app

from marketplace.errors import ValidationError
from marketplace.extensions import db, login_manager
from marketplace.models import User

logger = logging.getLogger(__name__)

IDENTITY_CLAIMS = ('email', 'first_name', 'last_name', 'profile_image_url')


class InvalidIdentityToken(Exception):
    """Raised when an identity token cannot be verified"""


def verify_identity_token(token: str) -> dict:
    """
    Decode and verify an identity-provider token

    Returns:
        dict: Verified claims, always containing 'sub'

    Raises:
        InvalidIdentityToken: On bad signature, expiry, audience or issuer
    """
    config = current_app.config
    options = {'require': ['sub']}
    if not config.get('IDENTITY_TOKEN_AUDIENCE'):
        options['verify_aud'] = False
    try:
        claims = jwt.decode(
            token,
            config['IDENTITY_TOKEN_SECRET'],
            algorithms=config['IDENTITY_TOKEN_ALGORITHMS'],
            audience=config.get('IDENTITY_TOKEN_AUDIENCE'),
            issuer=config.get('IDENTITY_TOKEN_ISSUER'),
            options=options,
        )
    except jwt.ExpiredSignatureError:
        raise InvalidIdentityToken('Identity token has expired')
    except jwt.InvalidTokenError as e:
        logger.warning('Rejected identity token: %s', e)
        raise InvalidIdentityToken('Invalid identity token')
    return claims


def upsert_user(claims: dict) -> User:
    """
    Insert or update the User keyed by the token subject

    Only identity fields are written; the role chosen during onboarding is kept.
    """
    user_id = str(claims.get('sub') or '').strip()
    if not user_id:
        raise ValidationError('Identity is missing a subject')

    user = db.session.get(User, user_id)
    if user is None:
        user = User(id=user_id)
        db.session.add(user)
        logger.info('Creating user %s from identity claims', user_id)
    else:
        user.touch()

    for claim in IDENTITY_CLAIMS:
        if claim in claims:
            setattr(user, claim, claims[claim])

    db.session.commit()
    return user


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, user_id)
