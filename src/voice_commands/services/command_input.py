"""Command input controller.

Ties a SpeechCapture to a CommandPipeline the way the command box of the
console works: the live transcript is mirrored into the input text, and a
dictation that ends with a transcript is submitted on its own.
"""

import asyncio
import logging

from voice_commands.dto import CommandOutcome, Suggestion
from voice_commands.entities import SpeechSession
from voice_commands.services.command_pipeline import CommandPipeline
from voice_commands.services.speech_capture import SpeechCapture

logger = logging.getLogger(__name__)


class CommandInput:
    """Input text, voice toggle and submit flow for one command box.

    Submitting clears the previous result, processes the command and then
    refreshes the history. Auto-submission runs as a task on the event
    loop the capture delivers its events on.
    """

    def __init__(
        self,
        pipeline: CommandPipeline,
        capture: SpeechCapture,
        auto_submit: bool = True,
    ) -> None:
        self._pipeline = pipeline
        self._capture = capture
        self._auto_submit = auto_submit
        self._text = ""
        self._was_listening = capture.is_listening
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe = capture.subscribe(self._on_session)

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value

    @property
    def pipeline(self) -> CommandPipeline:
        return self._pipeline

    @property
    def capture(self) -> SpeechCapture:
        return self._capture

    @property
    def pending_tasks(self) -> set[asyncio.Task]:
        """Auto-submissions still running."""
        return set(self._tasks)

    def _on_session(self, session: SpeechSession) -> None:
        if session.transcript:
            self._text = session.transcript

        finished = self._was_listening and not session.is_listening
        self._was_listening = session.is_listening

        if finished and session.transcript and self._auto_submit:
            self._schedule_submit(session.transcript)

    def _schedule_submit(self, text: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; dictated command not submitted")
            return

        task = loop.create_task(self.submit(text))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def submit(self, text: str | None = None) -> CommandOutcome | None:
        """Process the input text (or ``text``) and refresh the history.

        Returns:
            The outcome, or None when the text is blank or a command is
            already in flight
        """
        command = (text if text is not None else self._text).strip()
        if not command or self._pipeline.loading:
            return None

        self._pipeline.clear_result()
        outcome = await self._pipeline.process(command)
        await self._pipeline.fetch_history()
        return outcome

    def toggle_voice(self) -> None:
        """Stop an ongoing dictation, or start a fresh one with empty input."""
        if self._capture.is_listening:
            self._capture.stop()
            return

        self._capture.reset()
        self._text = ""
        self._capture.start()

    def choose_example(self, example: str) -> None:
        self._text = example

    async def use_suggestion(self, suggestion: Suggestion | str) -> CommandOutcome:
        return await self._pipeline.select_suggestion(suggestion)

    async def reuse(self, command_text: str) -> CommandOutcome:
        """Re-run a command picked from the history."""
        self._pipeline.clear_result()
        return await self._pipeline.reuse(command_text)

    def close(self) -> None:
        self._unsubscribe()
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()
