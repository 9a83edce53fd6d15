from __future__ import annotations


class EngineValidationError(ValueError):
    """Bad data reached the engine after normalization.

    Distinct from an empty result: callers use it to tell "no data" apart from
    "bad data".
    """

    def __init__(self, message: str, *, code: str = "invalid_input"):
        super().__init__(message)
        self.code = code


class DuplicateChangeError(EngineValidationError):
    def __init__(self, message: str, *, code: str = "duplicate_change"):
        super().__init__(message, code=code)


class InvalidTransitionError(EngineValidationError):
    def __init__(self, message: str, *, code: str = "invalid_transition"):
        super().__init__(message, code=code)


class ExplanationUnavailableError(RuntimeError):
    def __init__(self, message: str, *, code: str = "explanation_unavailable"):
        super().__init__(message)
        self.code = code
