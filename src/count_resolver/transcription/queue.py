"""
Single-worker FIFO transcription queue.

Submissions are drained strictly one at a time; each caller waits on its
own Future. Transient failures are retried with exponential backoff plus
jitter, then surfaced as TranscriptionFailedError.
"""
import logging
import queue
import random
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from ..config import ResolverConfig
from ..exceptions import TranscriptionFailedError, TransientTranscriptionError

logger = logging.getLogger(__name__)

MAX_ALTERNATIVES = 3

RETRYABLE_ERRORS = (TransientTranscriptionError, ConnectionError, TimeoutError)

_STOP = object()


@dataclass(frozen=True)
class TranscriptionResult:
    """Primary hypothesis plus up to three alternatives. Empty means silence."""
    transcript: str
    alternatives: List[str] = field(default_factory=list)

    def __post_init__(self):
        if len(self.alternatives) > MAX_ALTERNATIVES:
            object.__setattr__(self, "alternatives", list(self.alternatives[:MAX_ALTERNATIVES]))

    @property
    def is_silence(self) -> bool:
        return not self.transcript.strip()


def retry_delay(
    attempt: int,
    base_delay: float,
    max_delay: float,
    jitter: float,
    rand: Callable[[float, float], float] = random.uniform,
) -> float:
    """Backoff before retrying after the given (1-based) failed attempt."""
    backoff = base_delay * (2 ** (attempt - 1))
    return min(max_delay, backoff) + rand(0.0, jitter)


class TranscriptionQueue:
    """
    Serializes calls to a transcriber.
    
    Usage:
        with TranscriptionQueue(speech_client.transcribe) as transcriptions:
            result = transcriptions.submit(audio_bytes).result()
    
    The transcriber receives the submitted payload and returns a
    TranscriptionResult. It should raise TransientTranscriptionError (or
    ConnectionError / TimeoutError) for retryable failures.
    """

    def __init__(
        self,
        transcriber: Callable[[Any], TranscriptionResult],
        config: Optional[ResolverConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
        rand: Callable[[float, float], float] = random.uniform,
    ):
        config = config or ResolverConfig()
        self._transcriber = transcriber
        self._max_attempts = config.transcription_max_attempts
        self._base_delay = config.transcription_base_delay
        self._max_delay = config.transcription_max_delay
        self._jitter = config.transcription_jitter
        self._sleep = sleep
        self._rand = rand

        self._pending: "queue.Queue" = queue.Queue()
        self._closed = False
        self._lock = threading.Lock()
        self._worker = threading.Thread(
            target=self._drain, name="transcription-worker", daemon=True
        )
        self._worker.start()

    def submit(self, payload: Any) -> "Future[TranscriptionResult]":
        """
        Queue one transcription.
        
        :param payload: Audio (or whatever the transcriber accepts)
        :return: Future resolved with the TranscriptionResult
        :raises RuntimeError: If the queue has been closed
        """
        future: "Future[TranscriptionResult]" = Future()
        with self._lock:
            if self._closed:
                raise RuntimeError("TranscriptionQueue is closed")
            self._pending.put((payload, future))
        return future

    @property
    def pending(self) -> int:
        return self._pending.qsize()

    def close(self, timeout: Optional[float] = None) -> None:
        """Stop accepting work, finish queued submissions and stop the worker."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._pending.put(_STOP)
        self._worker.join(timeout)

    def __enter__(self) -> "TranscriptionQueue":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _drain(self) -> None:
        while True:
            item = self._pending.get()
            if item is _STOP:
                break
            payload, future = item
            if not future.set_running_or_notify_cancel():
                continue
            try:
                future.set_result(self._transcribe(payload))
            except Exception as e:
                future.set_exception(e)

    def _transcribe(self, payload: Any) -> TranscriptionResult:
        for attempt in range(1, self._max_attempts + 1):
            try:
                return self._transcriber(payload)
            except RETRYABLE_ERRORS as e:
                if attempt >= self._max_attempts:
                    logger.error(
                        f"[Transcription] failed after {attempt}/{self._max_attempts} attempts: "
                        f"{type(e).__name__}: {e}"
                    )
                    raise TranscriptionFailedError(
                        f"Transcription failed after {attempt} attempts: {e}"
                    ) from e
                delay = retry_delay(
                    attempt, self._base_delay, self._max_delay, self._jitter, self._rand
                )
                logger.warning(
                    f"[Transcription] retry attempt={attempt}/{self._max_attempts} "
                    f"reason={type(e).__name__} sleep={delay:.2f}s"
                )
                self._sleep(delay)
        raise TranscriptionFailedError("Transcription was not attempted")
