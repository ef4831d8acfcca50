"""Unified error codes and custom exceptions.

Every domain error carries a numeric code, a human-readable message and the
HTTP status the API layer renders it with.

Error kinds (intermediate bases, catch these in callers):
  ValidationError          malformed or out-of-policy input       (422)
  NotFoundError            referenced ticket or user is missing   (404)
  AuthorizationError       actor does not own the resource        (403)
  InvariantViolationError  marketplace rule would be broken       (422/409)

Error code ranges:
  1xxx: Auth/User
  2xxx: Account
  3xxx: Ticket
  4xxx: Transfer
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


class ValidationError(AppError):
    def __init__(self, code: int, message: str, http_status: int = 422) -> None:
        super().__init__(code, message, http_status)


class NotFoundError(AppError):
    def __init__(self, code: int, message: str, http_status: int = 404) -> None:
        super().__init__(code, message, http_status)


class AuthorizationError(AppError):
    def __init__(self, code: int, message: str, http_status: int = 403) -> None:
        super().__init__(code, message, http_status)


class InvariantViolationError(AppError):
    def __init__(self, code: int, message: str, http_status: int = 422) -> None:
        super().__init__(code, message, http_status)


# --- 1xxx: Auth/User ---

class UsernameExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Username already exists", 409)


class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Email already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid username or password", 401)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Account is disabled", 403)


class InvalidRefreshTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "Refresh token is invalid or expired", 401)


class UserNotFoundError(NotFoundError):
    def __init__(self, username: str) -> None:
        super().__init__(1006, f"User does not exist: {username}")


class OwnerNotFoundError(NotFoundError):
    def __init__(self, user_id: str) -> None:
        super().__init__(1007, f"Owner does not exist: {user_id}")


# --- 2xxx: Account ---

class InsufficientBalanceError(InvariantViolationError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient balance: required {required} cents, available {available} cents",
        )


class AccountNotFoundError(NotFoundError):
    def __init__(self, user_id: str) -> None:
        super().__init__(2002, f"Account not found for user {user_id}")


# --- 3xxx: Ticket ---

class TicketNotFoundError(NotFoundError):
    def __init__(self, ticket_id: str) -> None:
        super().__init__(3001, f"Ticket does not exist: {ticket_id}")


class InvalidValidityWindowError(ValidationError):
    def __init__(self) -> None:
        super().__init__(3002, "Ticket time interval is not valid")


class TicketExpiredError(ValidationError):
    def __init__(self) -> None:
        super().__init__(3003, "Ticket has expired")


class NegativeCostError(ValidationError):
    def __init__(self, cost: int) -> None:
        super().__init__(3004, f"Ticket cost must not be negative, got {cost}")


class MissingArgumentError(ValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(3005, f"Missing required argument: {name}")


class TicketOffMarketError(InvariantViolationError):
    def __init__(self, ticket_id: str) -> None:
        super().__init__(3006, f"Ticket {ticket_id} is off the market")


class EventEndedError(InvariantViolationError):
    def __init__(self, ticket_id: str) -> None:
        super().__init__(3007, f"The event for ticket {ticket_id} has already ended")


class SelfPurchaseError(InvariantViolationError):
    def __init__(self) -> None:
        super().__init__(3008, "User cannot buy a ticket that already belongs to them")


class TicketNotOwnedError(AuthorizationError):
    def __init__(self, ticket_id: str) -> None:
        super().__init__(3009, f"User does not own ticket {ticket_id}")


class TicketConflictError(InvariantViolationError):
    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            3010, f"Ticket {ticket_id} was modified concurrently, please retry", 409
        )


# --- 4xxx: Transfer ---

class TransferTicketRequiredError(ValidationError):
    def __init__(self) -> None:
        super().__init__(4001, "Transfer requires a ticket id")


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
