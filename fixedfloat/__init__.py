"""
FixedFloat exchange client package.

Signs requests with an HMAC credential pair and unwraps API response envelopes.
"""
from typing import Protocol, Dict


class RequestSigner(Protocol):
    """Protocol defining the interface for request signers."""

    def get_auth_headers(self, body: bytes) -> Dict[str, str]:
        """
        Get HTTP headers for an authenticated API request.

        Args:
            body: Serialized request body, exactly as it will be sent

        Returns:
            Dictionary of HTTP headers including the key and signature
        """
        ...


# Re-export for easy imports
from .auth import (
    AffiliateInfo,
    FixedFloatAuthenticator,
    FixedFloatCredentials,
    SignedRequest,
    filter_empty_fields,
    sign_body,
)
from .client import FixedFloatClient, get_fixedfloat_client, order_status_text, validate_envelope
from .currency import CurrencyAmount, calc_amount_and_direction
from .errors import ApiError, FixedFloatError, InvalidArgument, InvalidCredentials, TransportError

__all__ = [
    'RequestSigner',
    'AffiliateInfo',
    'FixedFloatAuthenticator',
    'FixedFloatCredentials',
    'SignedRequest',
    'filter_empty_fields',
    'sign_body',
    'FixedFloatClient',
    'get_fixedfloat_client',
    'order_status_text',
    'validate_envelope',
    'CurrencyAmount',
    'calc_amount_and_direction',
    'ApiError',
    'FixedFloatError',
    'InvalidArgument',
    'InvalidCredentials',
    'TransportError',
]
