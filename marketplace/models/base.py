"""
Base model with common fields and methods
"""
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from marketplace.extensions import db


def utcnow():
    return datetime.now(timezone.utc)


def generate_uuid():
    return str(uuid.uuid4())


class BaseModel(db.Model):
    """Abstract base model with common fields"""
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    def to_dict(self, exclude=None):
        """
        Convert model to dictionary

        Args:
            exclude (list): List of fields to exclude

        Returns:
            dict: Model as dictionary
        """
        exclude = exclude or []
        data = {}

        for column in self.__table__.columns:
            if column.name not in exclude:
                data[column.name] = serialize_value(getattr(self, column.name))

        return data


class UpdatedAtMixin:
    """Adds an updated_at column refreshed on every write"""
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def touch(self):
        self.updated_at = utcnow()


def serialize_value(value):
    """Render a column value as JSON-safe data"""
    if isinstance(value, Decimal):
        # Fixed-point strings keep cents exact on the wire
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    return value
