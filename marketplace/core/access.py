"""
Access-control guard.

``authorize`` is a pure decision over a principal, an action and the target
resource; ``ensure`` turns a denial into a Forbidden error for route code.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from marketplace.errors import Forbidden
from .principal import Principal, ProviderPrincipal

logger = logging.getLogger(__name__)


class Action(enum.Enum):
    VIEW_BOOKING = 'view_booking'
    LIST_CUSTOMER_BOOKINGS = 'list_customer_bookings'
    UPDATE_BOOKING_STATUS = 'update_booking_status'
    CREATE_SERVICE = 'create_service'
    PAY_BOOKING = 'pay_booking'


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None

    def __bool__(self):
        return self.allowed


ALLOW = Decision(True)


def deny(reason):
    return Decision(False, reason)


def _is_booking_customer(principal, booking):
    return principal.user_id == booking.customer_id


def _is_booking_provider(principal, booking):
    return principal.profile_id is not None and principal.profile_id == booking.provider_id


def authorize(principal: Principal, action: Action, resource=None) -> Decision:
    """
    Decide whether principal may perform action on resource

    Args:
        principal: CustomerPrincipal or ProviderPrincipal
        action (Action): Requested operation
        resource: The Booking for booking actions; unused otherwise

    Returns:
        Decision: ALLOW or a denial carrying the reason
    """
    if action is Action.VIEW_BOOKING:
        if _is_booking_customer(principal, resource) or _is_booking_provider(principal, resource):
            return ALLOW
        return deny('Unauthorized to view this booking')

    if action is Action.LIST_CUSTOMER_BOOKINGS:
        if isinstance(principal, ProviderPrincipal):
            return deny('Providers should use /api/provider/bookings')
        return ALLOW

    if action is Action.UPDATE_BOOKING_STATUS:
        if _is_booking_provider(principal, resource):
            return ALLOW
        return deny('Unauthorized to update this booking')

    if action is Action.CREATE_SERVICE:
        if principal.profile_id is not None:
            return ALLOW
        return deny('Only providers can create services')

    if action is Action.PAY_BOOKING:
        if _is_booking_customer(principal, resource):
            return ALLOW
        return deny('Unauthorized to pay for this booking')

    return deny('Unknown action')


def ensure(principal: Principal, action: Action, resource=None):
    """Raise Forbidden unless authorize() allows the action"""
    decision = authorize(principal, action, resource)
    if not decision:
        logger.warning(
            'Denied %s for user=%s resource=%s: %s',
            action.value, principal.user_id, getattr(resource, 'id', None), decision.reason
        )
        raise Forbidden(decision.reason)
    return decision
