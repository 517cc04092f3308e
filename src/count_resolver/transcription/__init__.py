"""
Admission control for the upstream speech-to-text collaborator.

The transcription backend degrades under concurrent load, so every call is
serialized through one worker with bounded retries.
"""
from .queue import TranscriptionQueue, TranscriptionResult, retry_delay

__all__ = ["TranscriptionQueue", "TranscriptionResult", "retry_delay"]
