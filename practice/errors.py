# practice/errors.py


class PracticeError(Exception):
    """Base class for conversation practice errors."""


class GenerationFailure(PracticeError):
    """The LLM produced no usable structured result (or timed out)."""


class InputValidationFailure(PracticeError):
    """Malformed persona, objective or transcript. Raised before any LLM call."""


class InvalidSessionState(PracticeError):
    def __init__(self, action: str, status: str):
        super().__init__(f"Cannot {action} while session is '{status}'")
        self.action = action
        self.status = status
