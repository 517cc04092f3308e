"""
Input validation and sanitization for spoken-command requests.
"""

from typing import List

from .exceptions import ValidationError


class InputValidator:
    """
    Validates and sanitizes transcripts before they reach the engine.
    """

    MAX_TRANSCRIPT_LENGTH = 500

    @staticmethod
    def sanitize_transcript(transcript, max_length: int = MAX_TRANSCRIPT_LENGTH) -> str:
        """
        Sanitize a transcript. Empty transcripts (silence) are valid.
        
        :param transcript: Transcript string
        :param max_length: Maximum accepted length
        :return: Sanitized transcript
        :raises ValidationError: If transcript is not a string or too long
        """
        if transcript is None:
            return ""

        if not isinstance(transcript, str):
            raise ValidationError("Transcript must be a string")

        if len(transcript) > max_length:
            raise ValidationError(
                f"Transcript exceeds maximum length of {max_length} characters"
            )

        sanitized = transcript.replace("\x00", "")
        return sanitized.strip()

    @staticmethod
    def sanitize_alternatives(alternatives, max_length: int = MAX_TRANSCRIPT_LENGTH) -> List[str]:
        """
        Sanitize alternative transcripts, dropping empty ones.
        
        :raises ValidationError: If any alternative is invalid
        """
        sanitized = [
            InputValidator.sanitize_transcript(alternative, max_length)
            for alternative in (alternatives or [])
        ]
        return [alternative for alternative in sanitized if alternative]
