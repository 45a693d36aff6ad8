"""Provider profile model"""
from marketplace.extensions import db
from .base import BaseModel, UpdatedAtMixin


class ProviderProfile(BaseModel, UpdatedAtMixin):
    """
    Provider profile - extended information for a user offering services
    One per user, enforced by the unique user_id
    """
    __tablename__ = 'provider_profiles'

    user_id = db.Column(
        db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True
    )

    bio = db.Column(db.Text)
    phone = db.Column(db.String(20))
    location = db.Column(db.String(255))
    years_experience = db.Column(db.Text)
    verified = db.Column(db.Boolean, nullable=False, default=False)

    # Relationships
    user = db.relationship('User', back_populates='provider_profile')
    services = db.relationship(
        'Service', back_populates='provider', lazy='dynamic'
    )
    bookings = db.relationship(
        'Booking', back_populates='provider', lazy='dynamic'
    )

    def __repr__(self):
        return f'<ProviderProfile {self.id} user={self.user_id}>'
