"""
Garden advisor error hierarchy.

All exceptions inherit from GardenAdvisorError so callers can catch one type
and still tell lookups from bad input apart by code.
"""


class GardenAdvisorError(Exception):
    """Base exception for all garden advisor errors."""

    def __init__(self, message: str, code: str = "GARDEN_ADVISOR_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to a response payload."""
        return {"success": False, "error": self.message, "code": self.code}


class QuestionNotFoundError(GardenAdvisorError, KeyError):
    """Raised when a question identifier is not in the bank."""

    def __init__(self, question_id: str):
        super().__init__(f"Question {question_id!r} not found", "QUESTION_NOT_FOUND")
        self.question_id = question_id

    def __str__(self) -> str:
        return self.message


class MalformedAnswerError(GardenAdvisorError, ValueError):
    """Raised when an answer's shape does not match its question type."""

    def __init__(self, question_id: str, reason: str):
        super().__init__(
            f"Malformed answer for {question_id!r}: {reason}", "MALFORMED_ANSWER"
        )
        self.question_id = question_id
        self.reason = reason
