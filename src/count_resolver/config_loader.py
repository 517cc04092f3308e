"""
Configuration loader with validation.

Builds ResolverConfig from environment variables (and a local .env file).
"""
from dotenv import load_dotenv

from .config import ResolverConfig
from .config_validator import (
    get_bool_env,
    get_float_env,
    get_int_env,
    get_optional_env,
    get_optional_float_env,
)


def load_config_from_env() -> ResolverConfig:
    """
    Load configuration from environment variables with validation.
    
    Usage:
        config = load_config_from_env()
        engine = ResolutionEngine(config)
    
    :return: Validated ResolverConfig instance
    :raises: ConfigurationError if a value is malformed or out of range
    """
    # Load .env file if it exists (for local development)
    load_dotenv()

    defaults = ResolverConfig()

    return ResolverConfig(
        candidate_floor=get_float_env("CANDIDATE_FLOOR", defaults.candidate_floor),
        fuzzy_accept_threshold=get_float_env(
            "FUZZY_ACCEPT_THRESHOLD", defaults.fuzzy_accept_threshold
        ),
        fuzzy_scorer=get_optional_env("FUZZY_SCORER", defaults.fuzzy_scorer).strip().lower(),
        max_alternatives=get_int_env("MAX_ALTERNATIVES", defaults.max_alternatives),
        fuzzy_commit_threshold=get_optional_float_env("FUZZY_COMMIT_THRESHOLD"),
        allow_alias_auto_save=get_bool_env(
            "ALLOW_ALIAS_AUTO_SAVE", defaults.allow_alias_auto_save
        ),
        alias_from_item_phrase=get_bool_env(
            "ALIAS_FROM_ITEM_PHRASE", defaults.alias_from_item_phrase
        ),
        transcription_max_attempts=get_int_env(
            "TRANSCRIBE_MAX_ATTEMPTS", defaults.transcription_max_attempts
        ),
        transcription_base_delay=get_float_env(
            "TRANSCRIBE_BASE_DELAY", defaults.transcription_base_delay
        ),
        transcription_max_delay=get_float_env(
            "TRANSCRIBE_MAX_DELAY", defaults.transcription_max_delay
        ),
        transcription_jitter=get_float_env("TRANSCRIBE_JITTER", defaults.transcription_jitter),
        max_transcript_length=get_int_env(
            "MAX_TRANSCRIPT_LENGTH", defaults.max_transcript_length
        ),
    )
