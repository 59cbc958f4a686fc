"""ICS-specific exceptions for error handling."""

from typing import Optional


class ICSError(Exception):
    """Base exception for ICS-related errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ICSFetchError(ICSError):
    """Exception raised when ICS file cannot be fetched."""



class ICSNetworkError(ICSError):
    """Exception raised for network-related ICS errors."""



class ICSParseError(ICSError):
    """Exception raised when ICS content cannot be parsed for an unexpected reason."""



class ICSDocumentRejectedError(ICSError):
    """Exception raised when the iCalendar grammar rejects a whole document."""

