"""User model"""
import enum

from flask_login import UserMixin

from marketplace.extensions import db
from .base import BaseModel, UpdatedAtMixin


class UserRole(str, enum.Enum):
    CUSTOMER = 'customer'
    PROVIDER = 'provider'

    @classmethod
    def values(cls):
        return [role.value for role in cls]


class User(BaseModel, UpdatedAtMixin, UserMixin):
    """
    User model - customers and providers
    Created from identity provider claims on first login; includes Flask-Login integration
    """
    __tablename__ = 'users'

    email = db.Column(db.String(255), unique=True)
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    profile_image_url = db.Column(db.String(500))

    role = db.Column(db.String(20), nullable=False, default=UserRole.CUSTOMER.value)

    # Relationships
    provider_profile = db.relationship(
        'ProviderProfile', back_populates='user', uselist=False, cascade='all, delete-orphan'
    )
    bookings = db.relationship(
        'Booking', back_populates='customer', lazy='dynamic'
    )

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'

    @property
    def full_name(self):
        """Get full name"""
        return ' '.join(part for part in (self.first_name, self.last_name) if part)

    def is_provider(self):
        """Check if user chose the provider role"""
        return self.role == UserRole.PROVIDER.value

    def to_dict(self, exclude=None):
        data = super().to_dict(exclude=exclude)
        data['full_name'] = self.full_name
        return data
