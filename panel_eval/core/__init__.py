"""
Core Package - Panel Evaluation Engine
panel_eval/core/__init__.py

Core infrastructure: dependencies, exceptions, logging.
Only the exceptions are re-exported here; import providers from
panel_eval.core.dependencies directly.
"""

from panel_eval.core.exceptions import (
    AlreadyDecided,
    AlreadySubmitted,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    DatabaseConnectionException,
    EntityNotFoundException,
    EvaluationValidationError,
    FeatureDisabled,
    IncompleteScoreSet,
    InvalidCredential,
    OutOfRangeScore,
    PanelEvalError,
    PermissionNotGranted,
    RepositoryException,
    Unauthenticated,
    UnknownCriterion,
    VoteNotRecorded,
    WeightMismatch,
)

__all__ = [
    "AlreadyDecided",
    "AlreadySubmitted",
    "AuthorizationError",
    "ConfigurationError",
    "ConflictError",
    "DatabaseConnectionException",
    "EntityNotFoundException",
    "EvaluationValidationError",
    "FeatureDisabled",
    "IncompleteScoreSet",
    "InvalidCredential",
    "OutOfRangeScore",
    "PanelEvalError",
    "PermissionNotGranted",
    "RepositoryException",
    "Unauthenticated",
    "UnknownCriterion",
    "VoteNotRecorded",
    "WeightMismatch",
]
