"""
Exception and error types for the token ledger.

Two families:
- ErrorKind / LedgerError: typed rejections. Returned to the caller as reply
  values and never abort the actor.
- Fatal errors: abort the whole invocation (undecodable payload, use before
  initialization, unroutable operation).
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Typed error kinds carried in error replies."""

    DECIMALS_ERROR = "DecimalsError"
    DESCRIPTION_ERROR = "DescriptionError"
    # Reserved: no operation raises these.
    MAX_SUPPLY_REACHED = "MaxSupplyReached"
    SUPPLY_ERROR = "SupplyError"
    NOT_ADMIN = "NotAdmin"
    NOT_ENOUGH_BALANCE = "NotEnoughBalance"
    ZERO_ADDRESS = "ZeroAddress"
    NOT_ALLOWED_TO_TRANSFER = "NotAllowedToTransfer"
    ADMIN_ALREADY_EXISTS = "AdminAlreadyExists"
    CANT_DELETE_YOURSELF = "CantDeleteYourself"
    TX_ALREADY_EXISTS = "TxAlreadyExists"


class LedgerError(Exception):
    """
    Raised by ledger components when a precondition fails.

    The dispatcher converts it into an error reply. Raising it guarantees that
    no state was written.
    """

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


class FatalError(Exception):
    """Base class for conditions that abort the invocation."""
    pass


class DecodeError(FatalError):
    """Raised when an inbound payload cannot be decoded."""
    pass


class NotInitializedError(FatalError):
    """Raised when an operation or query arrives before initialization."""
    pass


class AlreadyInitializedError(FatalError):
    """Raised when initialization is attempted a second time."""
    pass


class InvalidTransitionError(FatalError):
    """Raised when no handler is registered for an operation type."""
    pass
