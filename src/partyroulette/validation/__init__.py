from partyroulette.validation.invariants import (
    CriterionResult,
    CriterionStatus,
    InvariantChecker,
    ValidationReport,
    create_invariant_checker,
)

__all__ = [
    "CriterionResult",
    "CriterionStatus",
    "InvariantChecker",
    "ValidationReport",
    "create_invariant_checker",
]
