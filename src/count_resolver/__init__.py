"""
Constrained intent resolution for spoken inventory counts.

Public entry points:
- ResolutionEngine: transcript + canonical items + aliases -> ResolutionDecision
- CountLedger: applies committed decisions to counts
- align_items: aligns scanned sheet names with a master list
- TranscriptionQueue: serializes calls to a speech-to-text backend
"""
from .config import ResolverConfig
from .config_loader import load_config_from_env
from .engine import ResolutionEngine
from .counts import CountLedger
from .alignment import align_items, AlignmentReport
from .models import (
    UNMAPPED,
    Operation,
    DecisionState,
    MatchTier,
    ResolutionRequest,
    ResolutionDecision,
)
from .resolution import similarity, resolve_alias, learn_alias
from .interaction import classify_operation, extract_number
from .exceptions import (
    CountResolverError,
    ConfigurationError,
    InvalidRequestError,
    InvalidMutationError,
    TranscriptionError,
    TransientTranscriptionError,
    TranscriptionFailedError,
)

__all__ = [
    "ResolverConfig",
    "load_config_from_env",
    "ResolutionEngine",
    "CountLedger",
    "align_items",
    "AlignmentReport",
    "UNMAPPED",
    "Operation",
    "DecisionState",
    "MatchTier",
    "ResolutionRequest",
    "ResolutionDecision",
    "similarity",
    "resolve_alias",
    "learn_alias",
    "classify_operation",
    "extract_number",
    "CountResolverError",
    "ConfigurationError",
    "InvalidRequestError",
    "InvalidMutationError",
    "TranscriptionError",
    "TransientTranscriptionError",
    "TranscriptionFailedError",
]
