"""
Custom exceptions for the prediction dashboard.

Every ingestion or load failure surfaces as one of these, carrying a
human-readable message that names the offending row, field, value or
resource.

Usage:
    from predboard.exceptions import ValidationError, TransportError

    try:
        dataset = registry.load_dataset("gru-daily")
    except TransportError as e:
        print(f"Load failed: {e}")
"""

from typing import Optional


class PredBoardError(Exception):
    """
    Base exception for all dashboard errors.

    All custom exceptions inherit from this, allowing:
        except PredBoardError:
            # Catch any system error
    """
    pass


# =============================================================================
# INGESTION ERRORS
# =============================================================================

class ValidationError(PredBoardError):
    """
    Input could not be turned into a usable dataset.

    Raised when:
    - CSV text is empty or has no rows
    - Required columns are missing
    - A row has an empty symbol or date
    - A dataset ends up with zero stocks
    """
    pass


class CoercionError(ValidationError):
    """
    A predicted/actual value could not be read as a binary direction.
    """

    def __init__(self, message: str, field: str, row_number: int, value: Optional[str] = None):
        self.field = field
        self.row_number = row_number
        self.value = value
        super().__init__(message)


# =============================================================================
# TRANSPORT ERRORS
# =============================================================================

class TransportError(PredBoardError):
    """
    Error fetching a catalogue or dataset resource.

    Raised when:
    - No dataset id was given
    - The source reports a non-success status
    - The source is unreachable
    """

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.resource = resource
        self.status_code = status_code
        self.original_error = original_error
        if original_error:
            message += f" (caused by: {type(original_error).__name__}: {original_error})"
        super().__init__(message)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(PredBoardError):
    """
    Configuration or setup error.
    """

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"Configuration error ({setting}): {message}")
