"""Microphone recognizer backed by the SpeechRecognition package.

Each session records one phrase from the default microphone on a worker
thread and transcribes it with the Google Web Speech API using the
configured locale. The package produces no interim hypotheses, so a
successful session yields exactly one final result.

Events are delivered on the asyncio loop that called ``start`` (through
``call_soon_threadsafe``); without a running loop they are delivered
directly from the worker thread.

Requires:
    pip install SpeechRecognition PyAudio
"""

import asyncio
import logging
import threading
from typing import Any, Callable

import speech_recognition as sr

from voice_commands.config import settings
from voice_commands.errors import SpeechRecognizerError
from voice_commands.protocols import RecognitionListener

logger = logging.getLogger(__name__)


class SpeechRecognitionRecognizer:
    """SpeechRecognition implementation of the SpeechRecognizer protocol.

    Sessions are non-continuous with a single alternative. ``stop`` ends
    the recording at the next audio chunk and transcribes what was heard;
    ``on_end`` follows as usual. ``abort`` suppresses every event that has
    not been delivered yet.
    """

    def __init__(
        self,
        language: str | None = None,
        phrase_time_limit: float | None = None,
        listen_timeout: float | None = None,
        recognizer: sr.Recognizer | None = None,
        microphone_factory: Callable[[], Any] | None = None,
    ) -> None:
        """Initialize the recognizer.

        Args:
            language: Recognition locale. Defaults to settings.speech_language.
            phrase_time_limit: Max seconds of speech per session.
            listen_timeout: Seconds to wait for speech to begin.
            recognizer: Preconfigured sr.Recognizer.
            microphone_factory: Callable returning an audio source context
                manager. Defaults to sr.Microphone.
        """
        self._language = language or settings.speech_language
        self._phrase_time_limit = phrase_time_limit or settings.speech_phrase_time_limit
        self._listen_timeout = listen_timeout or settings.speech_listen_timeout
        self._recognizer = recognizer or sr.Recognizer()
        self._microphone_factory = microphone_factory or sr.Microphone
        self._supported: bool | None = None
        self._thread: threading.Thread | None = None
        self._active = threading.Event()
        self._stop_requested = threading.Event()
        self._aborted = threading.Event()
        self._emit: Callable[..., None] = self._deliver

    @classmethod
    def create(cls, language: str | None = None) -> "SpeechRecognitionRecognizer":
        """Factory method to create SpeechRecognitionRecognizer with defaults."""
        return cls(language=language)

    @property
    def is_supported(self) -> bool:
        """Whether a microphone backend is installed and a device exists."""
        if self._supported is None:
            try:
                # Raises AttributeError when PyAudio is not installed
                self._supported = bool(sr.Microphone.list_microphone_names())
            except (AttributeError, OSError) as e:
                logger.warning("Speech recognition unavailable: %s", e)
                self._supported = False
        return self._supported

    @property
    def language(self) -> str:
        """Get the recognition locale."""
        return self._language

    @property
    def is_running(self) -> bool:
        """Whether a session is recording or transcribing; cleared before ``on_end``."""
        return self._active.is_set()

    def start(self, listener: RecognitionListener) -> None:
        """Begin one listening session on a worker thread.

        Raises:
            SpeechRecognizerError: If a session is already running
        """
        if self.is_running:
            raise SpeechRecognizerError("A recognition session is already running")

        self._stop_requested.clear()
        self._aborted.clear()
        self._active.set()
        self._emit = self._dispatcher()
        self._thread = threading.Thread(
            target=self._run,
            args=(listener,),
            name="speech-recognizer",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop_requested.set()

    def abort(self) -> None:
        self._aborted.set()
        self._stop_requested.set()

    def _dispatcher(self) -> Callable[..., None]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return self._deliver

        def emit(callback: Callable[..., None], *args: Any) -> None:
            if not loop.is_closed():
                loop.call_soon_threadsafe(self._deliver, callback, *args)

        return emit

    def _deliver(self, callback: Callable[..., None], *args: Any) -> None:
        if self._aborted.is_set():
            return
        callback(*args)

    def _run(self, listener: RecognitionListener) -> None:
        emit = self._emit
        try:
            self._listen_once(listener, emit)
        finally:
            self._active.clear()
        emit(listener.on_end)

    def _listen_once(self, listener: RecognitionListener, emit: Callable[..., None]) -> None:
        try:
            with self._microphone_factory() as source:
                emit(listener.on_start)
                self._recognizer.adjust_for_ambient_noise(source, duration=0.5)
                audio = self._record(source)
        except sr.WaitTimeoutError:
            emit(listener.on_error, "no-speech")
            return
        except (AttributeError, OSError) as e:
            logger.warning("Could not open microphone: %s", e)
            emit(listener.on_error, "audio-capture")
            return

        if self._aborted.is_set():
            return

        try:
            transcript = self._recognizer.recognize_google(audio, language=self._language)
        except sr.UnknownValueError:
            emit(listener.on_error, "no-speech")
        except sr.RequestError as e:
            logger.warning("Speech service request failed: %s", e)
            emit(listener.on_error, "network")
        else:
            emit(listener.on_result, transcript, True)

    def _record(self, source: Any) -> sr.AudioData:
        """Record one phrase, cutting it short once a stop is requested.

        The stop flag is checked between streamed chunks, so it only takes
        effect after speech has begun.
        """
        chunks: list[sr.AudioData] = []
        for chunk in self._recognizer.listen(
            source,
            timeout=self._listen_timeout,
            phrase_time_limit=self._phrase_time_limit,
            stream=True,
        ):
            chunks.append(chunk)
            if self._stop_requested.is_set():
                logger.debug("Recording stopped after %d chunks", len(chunks))
                break
        if not chunks:
            raise sr.WaitTimeoutError("no audio captured")
        return sr.AudioData(
            b"".join(chunk.get_raw_data() for chunk in chunks),
            chunks[0].sample_rate,
            chunks[0].sample_width,
        )
