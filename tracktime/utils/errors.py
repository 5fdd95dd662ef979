#!filepath: tracktime/utils/errors.py
class UnknownClockError(ValueError):
    """
    Raised when a config or caller names a clock source that is not registered.
    """
