"""
Shared Flask extension instances.

Created as a separate module to avoid circular imports when route
blueprints need access to extensions that are initialised in the app factory.
"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

login_manager = LoginManager()

# Storage and the enabled flag come from RATELIMIT_* config at init_app().
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["100 per minute"],
)
