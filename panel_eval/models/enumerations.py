from enum import Enum

class Role(str, Enum):
    CONTRIBUTOR = "CONTRIBUTOR"        # Scores vendors
    DECISION_MAKER = "DECISION_MAKER"  # Scores, views aggregates, decides
    ADMIN = "ADMIN"                    # Observes and configures, never scores

class EvaluationStatus(str, Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"

class FinalDecision(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"

class VoteChoice(str, Enum):
    ACCEPT = "ACCEPT"
    REJECT = "REJECT"

class Capability(str, Enum):
    SUBMIT_EVALUATION = "submit_evaluation"
    VIEW_OWN_EVALUATION = "view_own_evaluation"
    VIEW_ALL_EVALUATIONS = "view_all_evaluations"
    VIEW_AGGREGATE = "view_aggregate"
    VIEW_REPORT = "view_report"
    DECIDE = "decide"
    ACCESS_CHAT = "access_chat"
    PRINT_REPORTS = "print_reports"
    EXPORT_DATA = "export_data"
    MANAGE_SETTINGS = "manage_settings"
    MANAGE_VENDORS = "manage_vendors"

class DenialReason(str, Enum):
    PERMISSION_NOT_GRANTED = "PERMISSION_NOT_GRANTED"
    FEATURE_DISABLED = "FEATURE_DISABLED"
    ALREADY_DECIDED = "ALREADY_DECIDED"
