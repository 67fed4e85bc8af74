# bracket/errors.py
"""
Error kinds raised by the bracket engine.

`retryable` tells a caller whether repeating the same call can succeed
(storage hiccups) or whether the request itself has to change.
"""


class BracketError(Exception):
    retryable = False


# ----------------------------
# Fatal: operator / config bugs
# ----------------------------

class ConfigError(BracketError):
    """Malformed or missing tournament configuration (phase, fixture, question)."""


class InvalidPhaseError(ConfigError):
    """A phase has a scoring type other than 'fixed' or 'pool'."""


class ClockError(BracketError):
    """`now` could not be resolved against the tournament timezone."""


# ----------------------------
# Recoverable: shown to the participant
# ----------------------------

class LockedSubmissionError(BracketError):
    """The phase deadline passed and a final submission already exists."""


class SubmissionStateError(BracketError):
    """The requested status transition is not allowed from the current state."""


class IncompleteSubmissionError(BracketError):
    def __init__(self, message, missing=(), invalid=()):
        super().__init__(message)
        self.missing = list(missing)
        self.invalid = list(invalid)


class LateSubmissionNotAcknowledgedError(BracketError):
    """Late submissions need an explicit acknowledgement of the penalty."""


class FeatureDisabledError(BracketError):
    pass


class ChipError(BracketError):
    pass


class ChipAlreadyUsedError(ChipError):
    pass


class StaleTargetError(ChipError):
    """The chip target match has already started."""


class ChipNotAllowedError(ChipError):
    pass


class InvalidChipTargetError(ChipError):
    pass


class ChipRegistrationError(ChipError):
    """
    The wildcard pick was written but the chip slot was not.

    Not retryable: calling `apply_chip` again would flip the pick back.
    `pending_registration` marks that `chips.register_chip` with the same
    `match` finishes the activation instead.
    """
    retryable = False
    pending_registration = True

    def __init__(self, message, match, new_pick):
        super().__init__(message)
        self.match = match
        self.new_pick = new_pick


# ----------------------------
# Storage
# ----------------------------

class StoreError(BracketError):
    retryable = True
