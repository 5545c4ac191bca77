from typing import Optional


class InvalidInput(ValueError):
    """Raised when caller-supplied input cannot be used for a calculation.

    details: the error dict produced by the validators in budgetr.functional,
    e.g. {"error": "invalid_goal_amount", "message": "...", "value": 0}
    """

    def __init__(self, details: dict, message: Optional[str] = None):
        self.details = dict(details)
        super().__init__(message or self.details.get("message", "invalid input"))

    @property
    def code(self) -> str:
        return self.details.get("error", "invalid_input")
