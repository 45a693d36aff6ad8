"""Booking model"""
import enum

from marketplace.extensions import db
from .base import BaseModel, UpdatedAtMixin


class BookingStatus(str, enum.Enum):
    PENDING = 'pending'
    ACCEPTED = 'accepted'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    @classmethod
    def values(cls):
        return [status.value for status in cls]


# Legal successors of each status; completed and cancelled are terminal
ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: frozenset({BookingStatus.ACCEPTED, BookingStatus.CANCELLED}),
    BookingStatus.ACCEPTED: frozenset({BookingStatus.COMPLETED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


class Booking(BaseModel, UpdatedAtMixin):
    """
    Booking model - a customer's scheduled engagement of one provider service
    """
    __tablename__ = 'bookings'

    customer_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    provider_id = db.Column(db.String(36), db.ForeignKey('provider_profiles.id', ondelete='CASCADE'), nullable=False)
    service_id = db.Column(db.String(36), db.ForeignKey('services.id', ondelete='CASCADE'), nullable=False)

    # Scheduling
    scheduled_date = db.Column(db.DateTime(timezone=True), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=BookingStatus.PENDING.value)

    # Pricing
    estimated_hours = db.Column(db.Numeric(4, 1))
    total_price = db.Column(db.Numeric(10, 2))

    notes = db.Column(db.Text)
    address = db.Column(db.Text)

    # Indexes
    __table_args__ = (
        db.Index('idx_bookings_customer_id', 'customer_id'),
        db.Index('idx_bookings_provider_id', 'provider_id'),
        db.Index('idx_bookings_status', 'status'),
    )

    # Relationships
    customer = db.relationship('User', back_populates='bookings')
    provider = db.relationship('ProviderProfile', back_populates='bookings')
    service = db.relationship('Service', back_populates='bookings')
    payment = db.relationship('Payment', back_populates='booking', uselist=False)

    def __repr__(self):
        return f'<Booking {self.id} ({self.status})>'

    def can_transition_to(self, new_status):
        """Check the transition table for current status -> new_status"""
        current = BookingStatus(self.status)
        return BookingStatus(new_status) in ALLOWED_TRANSITIONS[current]
