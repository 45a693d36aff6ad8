"""Booking and authorization core: principals, guard, lifecycle, projections, payments"""
from .access import Action, Decision, authorize, ensure
from .principal import CustomerPrincipal, ProviderPrincipal, current_principal, principal_for

__all__ = [
    'Action',
    'Decision',
    'authorize',
    'ensure',
    'CustomerPrincipal',
    'ProviderPrincipal',
    'current_principal',
    'principal_for',
]
