"""
Authenticated principals.

The stored role string is turned into a typed principal once per request, so
call sites dispatch on the principal's type instead of comparing strings.
"""
from dataclasses import dataclass
from typing import Optional, Union

from flask import g
from flask_login import current_user

from marketplace.models import ProviderProfile, UserRole


@dataclass(frozen=True)
class CustomerPrincipal:
    """A user who chose the customer role"""
    user_id: str
    profile_id: Optional[str] = None

    @property
    def role(self) -> UserRole:
        return UserRole.CUSTOMER


@dataclass(frozen=True)
class ProviderPrincipal:
    """A user who chose the provider role; profile_id is None until setup is done"""
    user_id: str
    profile_id: Optional[str] = None

    @property
    def role(self) -> UserRole:
        return UserRole.PROVIDER


Principal = Union[CustomerPrincipal, ProviderPrincipal]


def principal_for(user) -> Principal:
    """Build the principal for a persisted User"""
    profile = ProviderProfile.query.filter_by(user_id=user.id).first()
    profile_id = profile.id if profile else None
    if user.role == UserRole.PROVIDER.value:
        return ProviderPrincipal(user_id=user.id, profile_id=profile_id)
    return CustomerPrincipal(user_id=user.id, profile_id=profile_id)


def current_principal() -> Principal:
    """Principal for the logged-in user, built once per request"""
    if 'principal' not in g:
        g.principal = principal_for(current_user)
    return g.principal
