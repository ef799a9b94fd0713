"""
FixedFloat API credentials and HMAC request signing.
"""
from typing import Any, Dict, Mapping, Optional
import hashlib
import hmac
import json
import logging
import os

from .errors import InvalidCredentials


class AffiliateInfo:
    """Affiliate reference code and fee tax attached to price and order requests. Read-only."""

    def __init__(self, refcode: Optional[str] = None, afftax: Optional[Any] = None):
        """
        Initialize affiliate information.

        Args:
            refcode: Affiliate reference code
            afftax: Affiliate fee tax, in percent
        """
        self._refcode = refcode
        self._afftax = afftax

    @property
    def refcode(self) -> Optional[str]:
        return self._refcode

    @property
    def afftax(self) -> Optional[Any]:
        return self._afftax

    def as_fields(self) -> Dict[str, Any]:
        return {"refcode": self.refcode, "afftax": self.afftax}


class FixedFloatCredentials:
    """Store FixedFloat API credentials. Read-only once created."""

    def __init__(
        self,
        api_key: Optional[str],
        secret_key: Optional[str],
        affiliate: Optional[AffiliateInfo] = None
    ):
        """
        Initialize FixedFloat credentials.

        Args:
            api_key: API key identifier, sent in the X-API-KEY header
            secret_key: Secret key used as the HMAC key
            affiliate: Optional affiliate information

        Raises:
            InvalidCredentials: If either key is missing or empty
        """
        if not api_key or not secret_key:
            raise InvalidCredentials("Please provide an API and secret keys")
        self._api_key = api_key
        self._secret_key = secret_key
        self._affiliate = affiliate

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def secret_key(self) -> str:
        return self._secret_key

    @property
    def affiliate(self) -> Optional[AffiliateInfo]:
        return self._affiliate

    @classmethod
    def from_env(cls, env_var: str = "FIXEDFLOAT_CREDENTIALS") -> "FixedFloatCredentials":
        """
        Load credentials from environment variable containing JSON.

        Expected JSON format:
        {
            "api_key": "...",
            "secret_key": "...",
            "refcode": "optional affiliate code",
            "afftax": 0.5
        }

        Args:
            env_var: Environment variable name containing JSON credentials

        Returns:
            FixedFloatCredentials instance

        Raises:
            InvalidCredentials: If credentials are missing or invalid
        """
        creds_json = os.getenv(env_var)
        if not creds_json:
            raise InvalidCredentials(f"Environment variable '{env_var}' is not set")

        try:
            creds_data = json.loads(creds_json)
        except json.JSONDecodeError as e:
            raise InvalidCredentials(f"Invalid JSON in '{env_var}': {e}")
        if not isinstance(creds_data, dict):
            raise InvalidCredentials(f"Credentials in '{env_var}' must be a JSON object")

        required_fields = ["api_key", "secret_key"]
        missing = [f for f in required_fields if not creds_data.get(f)]
        if missing:
            raise InvalidCredentials(f"Missing required credential fields: {', '.join(missing)}")

        affiliate = None
        if creds_data.get("refcode") or creds_data.get("afftax") is not None:
            affiliate = AffiliateInfo(creds_data.get("refcode"), creds_data.get("afftax"))

        return cls(
            api_key=creds_data["api_key"],
            secret_key=creds_data["secret_key"],
            affiliate=affiliate
        )


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict)):
        return len(value) == 0
    return False


def filter_empty_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Drop fields whose value is None or an empty string/container.

    Zero and False are kept. Field order is preserved.

    Examples:
        >>> filter_empty_fields({"id": "X1", "tag": None, "address": ""})
        {'id': 'X1'}
    """
    return {k: v for k, v in fields.items() if not _is_empty(v)}


def serialize_body(fields: Mapping[str, Any]) -> bytes:
    """Serialize a reduced request body as compact JSON, the exact bytes that get signed and sent."""
    return json.dumps(fields, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def sign_body(body: bytes, secret_key: str) -> str:
    """Return the lowercase hex HMAC-SHA256 of body keyed with secret_key."""
    return hmac.new(secret_key.encode("utf-8"), body, hashlib.sha256).hexdigest()


class SignedRequest:
    """A request ready to send: path, exact body bytes and headers."""

    def __init__(self, path: str, body: bytes, headers: Dict[str, str]):
        self.path = path
        self.body = body
        self.headers = headers

    def __repr__(self) -> str:
        return f"SignedRequest(path={self.path!r}, body={self.body!r})"


class FixedFloatAuthenticator:
    """Sign FixedFloat API requests with an HMAC-SHA256 of the request body."""

    def __init__(self, credentials: FixedFloatCredentials):
        """
        Initialize authenticator with credentials.

        Args:
            credentials: FixedFloatCredentials instance
        """
        self.credentials = credentials

    def get_auth_headers(self, body: bytes) -> Dict[str, str]:
        """
        Get HTTP headers for an authenticated FixedFloat API request.

        Args:
            body: Serialized request body, exactly as it will be sent

        Returns:
            Dictionary of HTTP headers including X-API-KEY and X-API-SIGN
        """
        return {
            "Content-Type": "application/json; charset=UTF-8",
            "X-API-KEY": self.credentials.api_key,
            "X-API-SIGN": sign_body(body, self.credentials.secret_key)
        }

    def build_and_sign(self, path: str, fields: Optional[Mapping[str, Any]] = None) -> SignedRequest:
        """
        Build the request body for an operation and sign it.

        Empty fields are removed first so the signature and the transmitted
        body cover the same field set.

        Args:
            path: API endpoint path relative to the base URL (e.g. "price")
            fields: Request fields; may contain empty values

        Returns:
            SignedRequest instance
        """
        reduced = filter_empty_fields(fields or {})
        body = serialize_body(reduced)
        logging.debug(f"Signed request for {path} with fields: {', '.join(reduced) or '(none)'}")
        return SignedRequest(path, body, self.get_auth_headers(body))
