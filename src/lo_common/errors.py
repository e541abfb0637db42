"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Configuration
  2xxx: Validation
  3xxx: Upstream API
  4xxx: Wallet / provider
  5xxx: Token approval
  6xxx: Local order state
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Configuration ---

class ApiKeyNotConfiguredError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "API key not configured", 500)


# --- 2xxx: Validation ---

class MissingFieldError(AppError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(2001, f"Missing required field: {field}", 400)


class MissingOrderFieldError(AppError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(2002, f"Missing required order field: {field}", 400)


class MissingQueryParameterError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(2003, message, 400)


class InvalidFieldError(AppError):
    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        super().__init__(2004, f"Invalid field {field}: {detail}", 400)


class InvalidOrderInputError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2005, detail, 422)


class InvalidAddressError(AppError):
    def __init__(self, name: str, value: str) -> None:
        self.field = name
        super().__init__(2006, f"Invalid {name} address: {value!r}", 400)


# --- 3xxx: Upstream API ---

class UpstreamApiError(AppError):
    """Non-success answer from the 1inch API, relayed with its status code."""

    def __init__(self, status: int, body: str) -> None:
        self.upstream_status = status
        super().__init__(3001, f"1inch API error: {status} - {body}", status)


class InvalidApiKeyError(AppError):
    def __init__(self) -> None:
        super().__init__(3002, "Invalid API key", 401)


class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(3003, "Rate limit exceeded", 429)


class UpstreamBadResponseError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3004, detail, 502)


class PriceNotFoundError(AppError):
    def __init__(self) -> None:
        super().__init__(3005, "Base or quote token not found in API response", 502)


class UpstreamTimeoutError(AppError):
    def __init__(self) -> None:
        super().__init__(3006, "Upstream request timed out", 504)


class ProxyRequestError(AppError):
    """Non-success answer from this service's own proxy routes, seen by the client SDK."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        super().__init__(3007, message, status)


# --- 4xxx: Wallet / provider ---

class WalletError(AppError):
    def __init__(self, message: str, code: int = 4001) -> None:
        super().__init__(code, message, 400)


class ProviderNotFoundError(WalletError):
    def __init__(self) -> None:
        super().__init__(
            "No wallet provider found. Install a browser wallet or configure a local signer.",
            4002,
        )


class NetworkSwitchError(WalletError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 4003)


class WalletNotConnectedError(WalletError):
    def __init__(self) -> None:
        super().__init__("Wallet not connected", 4004)


# --- 5xxx: Token approval ---

class ApprovalFailedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(5001, f"Failed to approve token: {detail}", 400)


# --- 6xxx: Local order state ---

class OrderNotFoundError(AppError):
    def __init__(self, order_id: str) -> None:
        super().__init__(6001, f"Order not found: {order_id}", 404)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Unknown error") -> None:
        super().__init__(9002, f"Internal server error: {detail}", 500)
