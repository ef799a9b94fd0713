"""
FixedFloat client exceptions.
"""
from typing import Any, Optional

import requests


class FixedFloatError(Exception):
    """Base class for errors raised by the FixedFloat client."""


class InvalidCredentials(FixedFloatError, ValueError):
    """API key or secret key is missing, empty or cannot be loaded."""


class InvalidArgument(FixedFloatError, ValueError):
    """Operation inputs are missing or contradictory. Raised before any request is sent."""


class ApiError(FixedFloatError):
    """
    Response envelope signalled a failure.

    Attributes:
        code: Envelope error code (non-zero on failure)
        msg: Envelope message
        data: Envelope payload, if any
    """

    def __init__(self, code: Any, msg: Any, data: Optional[Any] = None):
        self.code = code
        self.msg = msg
        self.data = data
        super().__init__(f"Error {code}: {msg}")


# Network and HTTP-layer failures are raised by requests and propagate unchanged.
TransportError = requests.RequestException
