"""
SmartSplit identity gateway.

Sign-in, registration, password reset and sign-out over an external
identity provider and profile store.
"""

import logging

from smartsplit.errors import GatewayError
from smartsplit.gateway import IdentityGateway
from smartsplit.models import UserProfile

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["GatewayError", "IdentityGateway", "UserProfile"]
