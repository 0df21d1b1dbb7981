"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Request validation
  4xxx: Order
  9xxx: System

Every error is rendered on the wire as {"error": message, "code": code}.
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


# --- 1xxx: Request validation ---

class WalletAddressRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Wallet address is required", 400)


class InvalidOrderTypeError(AppError):
    def __init__(self, order_type: object = None) -> None:
        super().__init__(1002, "Invalid order type", 400)
        self.order_type = order_type


class InvalidAmountError(AppError):
    def __init__(self, field: str) -> None:
        super().__init__(1003, f"{field} must be a non-negative number", 400)


class InvalidExchangeRateError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Exchange rate must be greater than zero", 400)


class MalformedRequestError(AppError):
    def __init__(self, detail: str = "Malformed request") -> None:
        super().__init__(1005, detail, 400)


# --- 4xxx: Order ---

class OrderNotFoundError(AppError):
    def __init__(self, order_id: int) -> None:
        super().__init__(4004, f"Order not found: {order_id}", 404)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
