# streaming_cat/governance/exceptions.py
# Version: 1.0.0

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from streaming_cat.governance.launch_policy import PolicyValidationResult


class GovernanceViolationError(Exception):
    """
    A launch was refused because validate_launch_config() found blocking
    violations. Advisory warnings never raise.

    Attributes
    ----------
    result              : PolicyValidationResult -- the full report.
    blocking_violations : tuple -- shortcut to result.blocking_violations.
    """

    def __init__(self, result: "PolicyValidationResult") -> None:
        self.result = result
        self.blocking_violations = result.blocking_violations
        details = "".join(
            "\n  [%s] %s: %s" % (v.rule_id, v.field_name, v.message)
            for v in self.blocking_violations
        )
        super().__init__(
            "Launch policy violated: %d blocking violation(s) detected.%s"
            % (len(self.blocking_violations), details)
        )
