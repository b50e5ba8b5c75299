"""Custom exception classes for tip-splitter.

User input never raises: invalid edits are recovered inside the orchestrator.
These exceptions cover programming and configuration mistakes only.
"""

from typing import Optional, Dict, Any


class TipSplitterError(Exception):
    """Base exception for all tip-splitter errors."""

    error_code: str = "ERR000"  # Override in subclasses

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, error_code: Optional[str] = None):
        """
        Initialize tip-splitter exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context
            error_code: Optional error code override
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def __str__(self) -> str:
        """Return string representation with error code and details."""
        parts = [f"[{self.error_code}] {self.message}"]
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({detail_str})")
        return " ".join(parts)


class ConfigValidationError(TipSplitterError):
    """Raised when a settings file holds values the form cannot use.

    Examples:
        - Empty preset list
        - Non-numeric or non-positive preset values
        - Currency symbol that is not a string
    """

    error_code = "CFG001"

    def __init__(self, message: str, config_path: Optional[str] = None, key: Optional[str] = None):
        """
        Initialize configuration validation error.

        Args:
            message: Description of validation failure
            config_path: Path to settings file that failed validation
            key: Specific settings key that caused the error
        """
        details = {}
        if config_path:
            details['config_path'] = config_path
        if key:
            details['config_key'] = key
        super().__init__(message, details)


class FormEventError(TipSplitterError):
    """Raised when the orchestrator receives an event it has no transition for."""

    error_code = "EVT001"

    def __init__(self, message: str, event_type: Optional[str] = None):
        details = {}
        if event_type:
            details['event_type'] = event_type
        super().__init__(message, details)
