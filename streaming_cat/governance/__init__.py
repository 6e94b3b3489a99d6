# streaming_cat/governance/__init__.py
# Version: 1.0.0

from streaming_cat.governance.launch_policy import (
    validate_launch_config,
    PolicyValidationResult,
    PolicyViolation,
)
from streaming_cat.governance.exceptions import GovernanceViolationError

__all__ = [
    "validate_launch_config",
    "PolicyValidationResult",
    "PolicyViolation",
    "GovernanceViolationError",
]
