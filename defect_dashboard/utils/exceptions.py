"""Custom exceptions for the defect dashboard application."""

from typing import Any, Dict, Optional, Union

from fastapi import status


class CustomException(Exception):
    """Base custom exception class.

    Attributes:
        message: The error message
        status_code: HTTP status code
        headers: Optional HTTP headers
    """

    def __init__(
        self,
        message: Dict[str, Any],
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers: Optional[Dict[str, str]] = None
    ) -> None:
        """Initialize the custom exception.

        Args:
            message: The error message as a dictionary
            status_code: HTTP status code
            headers: Optional HTTP headers
        """
        self.message = message
        self.status_code = status_code
        self.headers = headers
        super().__init__(self.message)

    def __str__(self) -> str:
        return str(self.message.get("error", self.message))


def _error_body(message: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
    return message if isinstance(message, dict) else {"error": message}


class InvalidInputError(CustomException):
    """Raised when a request cannot be served as given (no statuses, bad fragment)."""

    def __init__(self, message: Union[str, Dict[str, Any]]) -> None:
        super().__init__(_error_body(message), status_code=status.HTTP_400_BAD_REQUEST)


class ConfigurationError(CustomException):
    """Raised when a required setting is missing at the time it is needed."""

    def __init__(self, message: Union[str, Dict[str, Any]]) -> None:
        super().__init__(_error_body(message), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
