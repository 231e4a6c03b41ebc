"""
Base domain exceptions
"""

from typing import Optional


class DomainException(Exception):
    """Base domain exception"""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR",
                 details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ConfigurationError(DomainException):
    """Invalid or inconsistent configuration"""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            message=f"Configuration error: {message}",
            code="CONFIGURATION_ERROR",
            details=details or {}
        )


class TranslationServiceError(DomainException):
    """Machine translation backend failure"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message=f"Translation service error: {message}",
            code="TRANSLATION_SERVICE_ERROR",
            details={"status_code": status_code} if status_code is not None else {}
        )
        self.status_code = status_code
