"""Custom exception classes for the application."""

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class InvalidRangeError(ValidationError):
    def __init__(self, detail: str = "Start date must be before end date"):
        super().__init__(detail=detail)


class RangeTooLargeError(ValidationError):
    def __init__(self, max_years: int = 30):
        super().__init__(detail=f"Date range cannot exceed {max_years} years")


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class DataSourceError(HTTPException):
    def __init__(self, detail: str = "Transaction store unavailable"):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
        )
