"""
FixedFloat API client: price quotes, order creation and order tracking.
"""
from typing import Any, Dict, Optional
import logging
import os

import requests

from .auth import AffiliateInfo, FixedFloatAuthenticator, FixedFloatCredentials, SignedRequest
from .currency import CurrencyAmount, calc_amount_and_direction
from .errors import ApiError, InvalidArgument

DEFAULT_API_BASE_URL = "https://ff.io/api/v2"

ORDER_TYPES = ("fixed", "float")

# Human-readable order states, indexed by the legacy numeric status
STATES = [
    "Transaction expected",
    "The transaction is waiting for the required number of confirmations",
    "Currency exchange",
    "Sending funds",
    "Completed",
    "Expired",
    "Not currently in use",
    "A decision must be made to proceed with the order",
]

STATUS_CODES = {
    "NEW": 0,
    "PENDING": 1,
    "EXCHANGE": 2,
    "WITHDRAW": 3,
    "DONE": 4,
    "EXPIRED": 5,
    "EMERGENCY": 7,
}


def order_status_text(order: Dict[str, Any]) -> Optional[str]:
    """
    Describe the status of an order returned by get_order/create_order.

    Accepts both the legacy numeric status and the v2 status code.

    Args:
        order: Order data as returned by the API

    Returns:
        Human-readable status, or None if the status is absent or unknown
    """
    status = order.get("status")
    if isinstance(status, str):
        status = STATUS_CODES.get(status.upper())
    if isinstance(status, bool) or not isinstance(status, int):
        return None
    if 0 <= status < len(STATES):
        return STATES[status]
    return None


def validate_envelope(envelope: Any) -> Any:
    """
    Unwrap a {code, msg, data} response envelope.

    Args:
        envelope: Decoded JSON response body

    Returns:
        The envelope's data, unchanged

    Raises:
        ApiError: If code is not 0 or msg is not "OK"
    """
    if not isinstance(envelope, dict):
        raise ApiError(None, "Malformed response envelope")
    code = envelope.get("code")
    msg = envelope.get("msg")
    if code != 0 or msg != "OK":
        raise ApiError(code, msg, envelope.get("data"))
    return envelope.get("data")


def _require_pair(from_ccy: Optional[str], to_ccy: Optional[str], example: str) -> Dict[str, Any]:
    """Parse both sides of a pair and derive amount/direction."""
    if not from_ccy or not to_ccy or (" " not in from_ccy and " " not in to_ccy):
        raise InvalidArgument(f"No required params. Example: {example}")

    source = CurrencyAmount.parse(from_ccy)
    target = CurrencyAmount.parse(to_ccy)
    if not source.ccy or not target.ccy:
        raise InvalidArgument(f"Missing currency code. Example: {example}")
    amount, direction = calc_amount_and_direction(source.amount, target.amount)
    if amount is None:
        raise InvalidArgument(f"No amount given for either currency. Example: {example}")

    return {
        "fromCcy": source.ccy,
        "toCcy": target.ccy,
        "direction": direction,
        "amount": amount,
    }


def _require_order_type(order_type: str) -> str:
    if order_type not in ORDER_TYPES:
        raise InvalidArgument(f"Invalid order type: {order_type}. Must be 'fixed' or 'float'")
    return order_type


class FixedFloatClient:
    """Signed client for the FixedFloat v2 REST API."""

    def __init__(
        self,
        api_key: Optional[str],
        secret_key: Optional[str],
        affiliate: Optional[AffiliateInfo] = None,
        api_base_url: Optional[str] = None,
        timeout: Optional[float] = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.

        Args:
            api_key: API key identifier
            secret_key: Secret key
            affiliate: Optional affiliate code and fee tax for price/order requests
            api_base_url: Override default API base URL (for testing)
            timeout: Request timeout in seconds, passed to requests
            session: Optional requests.Session to send requests through

        Raises:
            InvalidCredentials: If either key is missing or empty
        """
        if affiliate is not None:
            # Copy; the caller's object is not shared
            affiliate = AffiliateInfo(affiliate.refcode, affiliate.afftax)
        credentials = FixedFloatCredentials(api_key, secret_key, affiliate)
        self.authenticator = FixedFloatAuthenticator(credentials)

        if api_base_url is None:
            api_base_url = os.getenv("FIXEDFLOAT_API_BASE_URL", DEFAULT_API_BASE_URL)
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout
        self.session = session

    @property
    def affiliate(self) -> Optional[AffiliateInfo]:
        return self.authenticator.credentials.affiliate

    @classmethod
    def from_credentials(cls, credentials: FixedFloatCredentials, **kwargs: Any) -> "FixedFloatClient":
        return cls(credentials.api_key, credentials.secret_key, credentials.affiliate, **kwargs)

    def _affiliate_fields(self) -> Dict[str, Any]:
        if self.affiliate is None:
            return {}
        return self.affiliate.as_fields()

    def _send(self, signed: SignedRequest) -> requests.Response:
        url = f"{self.api_base_url}/{signed.path}"
        logging.debug(f"API URL: {url}")
        post = self.session.post if self.session is not None else requests.post
        return post(url, headers=signed.headers, data=signed.body, timeout=self.timeout)

    def _request(self, path: str, fields: Optional[Dict[str, Any]] = None) -> Any:
        """Sign, send and unwrap one API call."""
        signed = self.authenticator.build_and_sign(path, fields)
        response = self._send(signed)

        try:
            envelope = response.json()
        except ValueError:
            # Not JSON: surface the HTTP error if there is one
            response.raise_for_status()
            raise

        # Failure envelopes are reported as ApiError whatever the HTTP status
        if not response.ok and not (isinstance(envelope, dict) and "code" in envelope):
            response.raise_for_status()

        try:
            return validate_envelope(envelope)
        except ApiError as e:
            logging.error(f"FixedFloat {path} failed - Code: {e.code}, Message: {e.msg}")
            raise

    def get_currencies(self) -> Any:
        """Get the list of all currencies available on FixedFloat."""
        return self._request("ccies")

    def get_price(self, from_ccy: str, to_ccy: str, order_type: str = "float") -> Any:
        """
        Get a price quote for a currency pair with a set amount of funds.

        Exactly one side should carry an amount, e.g. get_price("0.1 ETH", "BTC")
        or get_price("ETH", "0.1 BTC").

        Args:
            from_ccy: Source currency, optionally prefixed by an amount
            to_ccy: Destination currency, optionally prefixed by an amount
            order_type: "fixed" or "float"

        Returns:
            Price data from the API

        Raises:
            InvalidArgument: If a currency is missing or no side has an amount
            ApiError: If the API rejects the request
        """
        fields: Dict[str, Any] = {"type": _require_order_type(order_type)}
        fields.update(_require_pair(from_ccy, to_ccy, "get_price('0.1 ETH', 'BTC')"))
        fields.update(self._affiliate_fields())
        logging.info(f"Requesting {order_type} price: {from_ccy} -> {to_ccy}")
        return self._request("price", fields)

    def create_order(
        self,
        from_ccy: str,
        to_ccy: str,
        to_address: str,
        order_type: str = "float",
        tag: Optional[str] = None
    ) -> Any:
        """
        Create an exchange order.

        Args:
            from_ccy: Source currency, optionally prefixed by an amount
            to_ccy: Destination currency, optionally prefixed by an amount
            to_address: Destination address for the exchanged funds. A MEMO or
                destination tag may be appended after a colon instead of using tag.
            order_type: "fixed" or "float"
            tag: MEMO or destination tag

        Returns:
            Order data from the API, including the order id and security token

        Raises:
            InvalidArgument: If a currency or the address is missing, or no side has an amount
            ApiError: If the API rejects the request
        """
        fields: Dict[str, Any] = {"type": _require_order_type(order_type)}
        fields.update(_require_pair(from_ccy, to_ccy, "create_order('0.1 ETH', 'BTC', '<address>')"))
        if not to_address:
            raise InvalidArgument("Destination address is required")
        fields["toAddress"] = to_address
        fields["tag"] = tag
        fields.update(self._affiliate_fields())

        logging.info(f"Creating {order_type} order: {from_ccy} -> {to_ccy}")
        order = self._request("create", fields)
        if isinstance(order, dict):
            logging.info(f"Order created - ID: {order.get('id')}")
        return order

    def get_order(self, order_id: str, token: str) -> Any:
        """
        Get information about an order.

        Args:
            order_id: Order ID
            token: Security token of the order
        """
        return self._request("order", {"id": order_id, "token": token})

    def set_emergency(self, order_id: str, token: str, choice: str, address: Optional[str] = None) -> Any:
        """
        Choose the emergency action for an order.

        Args:
            order_id: Order ID
            token: Security token of the order
            choice: "EXCHANGE" or "REFUND"
            address: Refund address, required by the API when choice is "REFUND"
        """
        logging.info(f"Setting emergency action {choice} for order {order_id}")
        return self._request("emergency", {"id": order_id, "token": token, "choice": choice, "address": address})


# Global client instance (loaded lazily)
_client: Optional[FixedFloatClient] = None


def get_fixedfloat_client() -> FixedFloatClient:
    """
    Get or create the global FixedFloatClient instance from the environment.

    Returns:
        FixedFloatClient instance

    Raises:
        InvalidCredentials: If credentials cannot be loaded
    """
    global _client

    if _client is None:
        credentials = FixedFloatCredentials.from_env()
        _client = FixedFloatClient.from_credentials(credentials)
        logging.info(f"Initialized FixedFloat client for {_client.api_base_url}")

    return _client
