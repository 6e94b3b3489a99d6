# streaming_cat/core/__init__.py
# Core types for the streaming covenant.
# Authoritative import source: streaming_cat.core.covenant

from streaming_cat.core.logging_layer import (
    Event,
    EventFilter,
    EventLogger,
    LoggingError,
)
from streaming_cat.core.covenant import (
    RequiredEffects,
    SpendDecision,
    SpendParameters,
    SpendRejectedError,
    StreamError,
    StreamParameters,
    StreamState,
    StreamTransition,
    evaluate_spend,
    transition,
    validate_spend,
)
