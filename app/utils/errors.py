"""
Meal Planner API - Custom Exception Classes.

Exception hierarchy for application error handling. Every fault raised
inside a request is one of these; the application exception handler in
``main.py`` turns them into ``{"error": message}`` responses.
"""

from typing import Optional


class MealPlannerException(Exception):
    """
    Base exception class for the Meal Planner application.

    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message returned to the client.
        status_code: HTTP status code for the error.
        detail: Additional error details (server-side only).
    """

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        detail: Optional[str] = None
    ):
        """
        Initialize MealPlannerException.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code (default 500).
            detail: Additional error details.
        """
        self.message = message
        self.status_code = status_code
        self.detail = detail or message
        super().__init__(self.message)


class ValidationError(MealPlannerException):
    """
    Exception raised for input validation failures.

    Used when:
    - Missing required fields
    - Invalid input format

    Always raised before any call to the generation service.
    """

    def __init__(
        self,
        message: str = "Validation error",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=400,
            detail=detail
        )


class NotFoundError(MealPlannerException):
    """
    Exception raised when a stored record is not found.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=404,
            detail=detail
        )


class GenerationError(MealPlannerException):
    """
    Exception raised when the generation service call itself fails.

    Used when:
    - Network or service errors
    - Missing API key
    - Timeouts

    The message is generic; the cause is kept in ``detail`` for logging.
    """

    def __init__(
        self,
        message: str = "Failed to generate a response due to a server error.",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=500,
            detail=detail
        )


class DecodeError(MealPlannerException):
    """
    Exception raised when model output cannot be decoded as a JSON document.

    Attributes:
        raw_text: The offending text, for server-side logging only.
    """

    def __init__(
        self,
        message: str = "The AI returned a response in an unreadable format. Please try again.",
        raw_text: Optional[str] = None,
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=500,
            detail=detail
        )
        self.raw_text = raw_text


class ContractViolationError(DecodeError):
    """
    Exception raised when decoded output breaks the mandatory-field contract.

    Only raised while ``STRICT_PLAN_VALIDATION`` is on. The JSON itself
    parsed, so the message differs from an unreadable response.
    """

    def __init__(
        self,
        message: str = "The AI response was missing required fields. Please try again.",
        raw_text: Optional[str] = None,
        detail: Optional[str] = None
    ):
        super().__init__(message=message, raw_text=raw_text, detail=detail)


class RecordStoreError(MealPlannerException):
    """
    Exception raised when saved plans or favorites cannot be read or written.
    """

    def __init__(
        self,
        message: str = "Failed to access saved records.",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=500,
            detail=detail
        )
