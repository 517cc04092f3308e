from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError

FUZZY_SCORERS = ("max", "dice", "ratio", "partial_ratio", "token_sort_ratio")


@dataclass
class ResolverConfig:
    # Item matching
    candidate_floor: float = 0.60
    fuzzy_accept_threshold: float = 0.85
    fuzzy_scorer: str = "max"
    max_alternatives: int = 3
    # Lone fuzzy candidates below this ask for confirmation; None disables
    fuzzy_commit_threshold: Optional[float] = None

    # Alias learning
    allow_alias_auto_save: bool = False
    alias_from_item_phrase: bool = False

    # Transcription queue
    transcription_max_attempts: int = 3
    transcription_base_delay: float = 0.5
    transcription_max_delay: float = 8.0
    transcription_jitter: float = 1.0

    # Input limits
    max_transcript_length: int = 500

    def __post_init__(self):
        for name in ("candidate_floor", "fuzzy_accept_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be between 0.0 and 1.0, got {value}")

        if self.fuzzy_accept_threshold < self.candidate_floor:
            raise ConfigurationError(
                f"fuzzy_accept_threshold ({self.fuzzy_accept_threshold}) must not be "
                f"below candidate_floor ({self.candidate_floor})"
            )

        if self.fuzzy_commit_threshold is not None and not 0.0 <= self.fuzzy_commit_threshold <= 1.0:
            raise ConfigurationError(
                f"fuzzy_commit_threshold must be between 0.0 and 1.0, got {self.fuzzy_commit_threshold}"
            )

        if self.fuzzy_scorer not in FUZZY_SCORERS:
            raise ConfigurationError(
                f"Unknown fuzzy_scorer '{self.fuzzy_scorer}'. Must be one of: {list(FUZZY_SCORERS)}"
            )

        if self.max_alternatives < 0:
            raise ConfigurationError(f"max_alternatives must be >= 0, got {self.max_alternatives}")

        if self.transcription_max_attempts < 1:
            raise ConfigurationError(
                f"transcription_max_attempts must be >= 1, got {self.transcription_max_attempts}"
            )

        for name in ("transcription_base_delay", "transcription_max_delay", "transcription_jitter"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {getattr(self, name)}")

        if self.max_transcript_length < 1:
            raise ConfigurationError(
                f"max_transcript_length must be >= 1, got {self.max_transcript_length}"
            )
