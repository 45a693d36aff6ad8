"""Payment model"""
import enum

from marketplace.extensions import db
from .base import BaseModel


class PaymentStatus(str, enum.Enum):
    PENDING = 'pending'
    COMPLETED = 'completed'
    FAILED = 'failed'
    REFUNDED = 'refunded'


class Payment(BaseModel):
    """
    Payment model - the local record of a processor payment intent for a booking
    """
    __tablename__ = 'payments'

    booking_id = db.Column(
        db.String(36), db.ForeignKey('bookings.id', ondelete='CASCADE'), nullable=False, unique=True
    )

    # Always copied from the booking's total_price
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=PaymentStatus.PENDING.value)

    # Payment processor details
    stripe_payment_intent_id = db.Column(db.String(255))
    paid_at = db.Column(db.DateTime(timezone=True))

    # Relationships
    booking = db.relationship('Booking', back_populates='payment')

    def __repr__(self):
        return f'<Payment {self.booking_id} - ${self.amount} ({self.status})>'

    def is_settled(self):
        return self.status == PaymentStatus.COMPLETED.value
