"""
Custom Exceptions - Panel Evaluation Engine
panel_eval/core/exceptions.py

Repository exceptions plus the evaluation domain error taxonomy:
configuration, validation, authorization and conflict errors.
"""

from typing import Any, Iterable, Optional


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in the record store."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class DatabaseConnectionException(RepositoryException):
    """Record store connection failure."""

    def __init__(self, message: str = "Record store connection failed"):
        self.message = message
        super().__init__(message)


class VoteNotRecorded(RepositoryException):
    """Decision was stored but its Vote could not be written."""

    def __init__(self, vendor_id: str, final_decision: str):
        self.vendor_id = vendor_id
        self.final_decision = final_decision
        super().__init__(
            f"Vendor {vendor_id} decided {final_decision} but the vote was not recorded"
        )


# =============================================================================
# DOMAIN ERRORS
# =============================================================================

class PanelEvalError(Exception):
    """Base class for evaluation domain errors."""

    error_code = "PANEL_EVAL_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(PanelEvalError):
    """Corrupt configuration. Unrecoverable; must halt startup."""

    error_code = "CONFIGURATION_ERROR"


class WeightMismatch(ConfigurationError):
    """Rubric weights do not add up.

    ``category_key`` is None when the mismatch is in the total of all
    category shares rather than within one category.
    """

    error_code = "WEIGHT_MISMATCH"

    def __init__(self, category_key: Optional[str], expected: Any, actual: Any):
        self.category_key = category_key
        self.expected = expected
        self.actual = actual
        scope = f"category '{category_key}'" if category_key else "rubric total"
        super().__init__(
            f"Weight mismatch in {scope}: expected {expected}, got {actual}",
            details={
                "category_key": category_key,
                "expected": str(expected),
                "actual": str(actual),
            },
        )


class EvaluationValidationError(PanelEvalError):
    """Rejected score submission. Nothing is persisted."""

    error_code = "VALIDATION_ERROR"


class OutOfRangeScore(EvaluationValidationError):
    error_code = "OUT_OF_RANGE_SCORE"

    def __init__(self, criterion_key: str, value: Any):
        self.criterion_key = criterion_key
        self.value = value
        super().__init__(
            f"Score for '{criterion_key}' must be a number between 0 and 10, got {value!r}",
            details={"criterion_key": criterion_key, "value": repr(value)},
        )


class IncompleteScoreSet(EvaluationValidationError):
    error_code = "INCOMPLETE_SCORE_SET"

    def __init__(self, missing_keys: Iterable[str]):
        self.missing_keys = list(missing_keys)
        super().__init__(
            f"Scores are required for all criteria; missing: {', '.join(self.missing_keys)}",
            details={"missing_keys": self.missing_keys},
        )


class UnknownCriterion(EvaluationValidationError):
    error_code = "UNKNOWN_CRITERION"

    def __init__(self, keys: Iterable[str]):
        self.keys = list(keys)
        super().__init__(
            f"Unknown criteria: {', '.join(self.keys)}",
            details={"keys": self.keys},
        )


class AuthorizationError(PanelEvalError):
    """Denied capability. Carries only the denial reason, never internal state."""

    error_code = "AUTHORIZATION_ERROR"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    default_message = "Not authorized"


class PermissionNotGranted(AuthorizationError):
    error_code = "PERMISSION_NOT_GRANTED"
    default_message = "You do not have permission for this action"


class FeatureDisabled(AuthorizationError):
    error_code = "FEATURE_DISABLED"
    default_message = "This feature is currently disabled"


class Unauthenticated(AuthorizationError):
    error_code = "UNAUTHENTICATED"
    default_message = "Authentication required"


class InvalidCredential(AuthorizationError):
    error_code = "INVALID_CREDENTIAL"
    default_message = "Invalid credential"


class ConflictError(PanelEvalError):
    """State changed underneath the caller; re-fetch instead of retrying."""

    error_code = "CONFLICT"


class AlreadySubmitted(ConflictError):
    error_code = "ALREADY_SUBMITTED"

    def __init__(self, vendor_id: str, evaluator_id: str):
        self.vendor_id = vendor_id
        self.evaluator_id = evaluator_id
        super().__init__("Evaluation has already been submitted")


class AlreadyDecided(ConflictError):
    error_code = "ALREADY_DECIDED"

    def __init__(self, vendor_id: str, final_decision: Optional[str] = None):
        self.vendor_id = vendor_id
        self.final_decision = final_decision
        super().__init__(
            "A final decision has already been recorded for this vendor",
            details={"final_decision": final_decision} if final_decision else None,
        )
