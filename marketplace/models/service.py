"""Service model"""
from marketplace.extensions import db
from marketplace.utils.helpers import quantize_money
from .base import BaseModel, UpdatedAtMixin

SERVICE_CATEGORIES = ('Plumbing', 'Electrical', 'Painting', 'Carpentry', 'HVAC', 'Cleaning')


class Service(BaseModel, UpdatedAtMixin):
    """
    Service model - an hourly-priced offering published by a provider
    """
    __tablename__ = 'services'

    provider_id = db.Column(
        db.String(36), db.ForeignKey('provider_profiles.id', ondelete='CASCADE'), nullable=False
    )

    category = db.Column(db.String(50), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)

    # Pricing
    price_per_hour = db.Column(db.Numeric(10, 2), nullable=False)

    image_url = db.Column(db.String(500))

    # Indexes
    __table_args__ = (
        db.Index('idx_services_provider_id', 'provider_id'),
        db.Index('idx_services_category', 'category'),
    )

    # Relationships
    provider = db.relationship('ProviderProfile', back_populates='services')
    bookings = db.relationship('Booking', back_populates='service', lazy='dynamic')

    def __repr__(self):
        return f'<Service {self.title}>'

    def calculate_price(self, hours):
        """
        Price for a number of hours at this service's hourly rate

        Args:
            hours (Decimal): Estimated hours

        Returns:
            Decimal: Total, quantized to cents
        """
        return quantize_money(self.price_per_hour * hours)
