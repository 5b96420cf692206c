"""Jupiter Client Custom Exceptions"""

from typing import Optional


class JupiterError(Exception):
    """Base exception for the Jupiter client"""
    pass

class JupiterConnectionError(JupiterError):
    """Error reaching the Jupiter API"""
    pass

class ResponseDecodeError(JupiterError):
    """Response body is not JSON or does not match the expected shape"""
    pass

class JupiterApiError(JupiterError):
    """Error reported by the Jupiter API itself"""
    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        if status is None:
            super().__init__(f"Jupiter API error: {message}")
        else:
            super().__init__(f"Jupiter API error ({status}): {message}")

class InvalidPubkeyError(JupiterError, ValueError):
    """Invalid public key in response data"""
    pass

class Base64DecodeError(JupiterError, ValueError):
    """Malformed base64 payload in response data"""
    pass

class TransactionDecodeError(JupiterError, ValueError):
    """Decoded bytes are not a valid serialized transaction"""
    pass
