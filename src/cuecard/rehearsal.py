"""Rehearsal playback: a speech queue and a session that pauses for the user."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from pydantic import Field

from cuecard.config import get_logger
from cuecard.exceptions import SpeechError
from cuecard.models import CueCardModel, Line, Script

logger = get_logger(__name__)

DoneCallback = Callable[[], None]
ErrorCallback = Callable[[Exception], None]


class SpeechOptions(CueCardModel):
    """Voice parameters handed to the speech backend."""

    rate: float = Field(default=0.9, ge=0.1, le=10.0)
    pitch: float = Field(default=1.0, ge=0.1, le=10.0)
    volume: float = Field(default=1.0, ge=0.0, le=1.0)


@runtime_checkable
class SpeechBackend(Protocol):
    """A text-to-speech engine that reports completion through callbacks."""

    def speak(
        self,
        text: str,
        options: SpeechOptions,
        on_done: DoneCallback,
        on_error: ErrorCallback,
    ) -> None:
        """Start speaking text; exactly one callback fires when it ends."""
        ...

    def stop(self) -> None:
        """Stop speaking immediately."""
        ...


@dataclass
class _Utterance:
    text: str
    options: SpeechOptions
    on_done: DoneCallback | None


class SpeechQueue:
    """Serialize speech requests over a backend.

    Requests made while something is being spoken wait their turn. The next
    request starts after the previous one finishes or fails.
    """

    def __init__(
        self,
        backend: SpeechBackend,
        default_options: SpeechOptions | None = None,
    ) -> None:
        self.backend = backend
        self.default_options = default_options or SpeechOptions()
        self.is_speaking = False
        self._pending: deque[_Utterance] = deque()
        self._current: _Utterance | None = None
        self._draining = False

    def __len__(self) -> int:
        return len(self._pending)

    def set_default_options(self, options: SpeechOptions) -> None:
        """Override the defaults with the options that were explicitly set."""
        self.default_options = self._merge(options)

    def _merge(self, options: SpeechOptions | None) -> SpeechOptions:
        if options is None:
            return self.default_options
        return self.default_options.model_copy(
            update=options.model_dump(exclude_unset=True)
        )

    def speak(
        self,
        text: str,
        options: SpeechOptions | None = None,
        on_done: DoneCallback | None = None,
    ) -> None:
        """Speak text now, or queue it if something is already playing.

        Raises:
            SpeechError: If text is empty
        """
        if not text or not text.strip():
            raise SpeechError(
                message="Cannot speak empty text",
                hint="Skip empty lines before handing them to the speech queue",
            )
        self._pending.append(
            _Utterance(text=text, options=self._merge(options), on_done=on_done)
        )
        self._drain()

    def stop(self) -> None:
        """Stop playback and drop everything still queued."""
        self.backend.stop()
        self._pending.clear()
        self._current = None
        self.is_speaking = False

    def _drain(self) -> None:
        # Backends may complete from inside speak(); re-entrant calls return
        # and the outer loop starts the next utterance.
        if self._draining:
            return
        self._draining = True
        try:
            while self._pending and not self.is_speaking:
                self._start(self._pending.popleft())
        finally:
            self._draining = False

    def _start(self, utterance: _Utterance) -> None:
        self.is_speaking = True
        self._current = utterance

        def done() -> None:
            if self._current is not utterance:
                return
            self._current = None
            self.is_speaking = False
            if utterance.on_done:
                utterance.on_done()
            self._drain()

        def failed(error: Exception) -> None:
            if self._current is not utterance:
                return
            logger.error("Speech failed", error=str(error), text=utterance.text[:40])
            self._current = None
            self.is_speaking = False
            self._drain()

        self.backend.speak(utterance.text, utterance.options, done, failed)


class PracticeStats(CueCardModel):
    """Progress of one rehearsal."""

    user_character_id: str
    completed_lines: int
    total_lines: int
    mistakes: int
    started_at: datetime
    ended_at: datetime | None = None


class RehearsalSession:
    """Walk a script line by line, reading every line but the user's.

    On the user's lines the session waits for ``advance()``; other lines are
    spoken and advance on their own when speech completes.
    """

    def __init__(
        self,
        script: Script,
        user_character_id: str,
        queue: SpeechQueue,
        direction_prefix: str = "Direzione: ",
        on_complete: DoneCallback | None = None,
    ) -> None:
        self.script = script
        self.user_character_id = user_character_id
        self.queue = queue
        self.direction_prefix = direction_prefix
        self.on_complete = on_complete
        self.lines: list[Line] = list(script.iter_lines())
        self.index = 0
        self.is_playing = False
        self.mistakes = 0
        self.started_at = datetime.now(UTC)
        self.ended_at: datetime | None = None
        self._speaking_index: int | None = None
        self._driving = False

    @property
    def current_line(self) -> Line | None:
        """The line being rehearsed, or None when finished."""
        if self.index < len(self.lines):
            return self.lines[self.index]
        return None

    @property
    def is_finished(self) -> bool:
        return self.index >= len(self.lines)

    @property
    def is_user_turn(self) -> bool:
        line = self.current_line
        return line is not None and line.character_id == self.user_character_id

    def spoken_text(self, line: Line) -> str:
        """Text read aloud for a line; directions get the prefix."""
        if line.is_direction:
            return f"{self.direction_prefix}{line.text}"
        return line.text

    def play(self) -> None:
        """Start or resume playback from the current line."""
        self.is_playing = True
        self._drive()

    def _drive(self) -> None:
        # Lines completed from inside speak() only move the index; this loop
        # speaks the next one.
        if self._driving:
            return
        self._driving = True
        try:
            while self.is_playing:
                if self.is_finished:
                    self._finish()
                    return
                if self.is_user_turn or self._speaking_index == self.index:
                    return
                self._speaking_index = self.index
                self.queue.speak(
                    self.spoken_text(self.lines[self.index]),
                    on_done=partial(self._on_line_spoken, self.index),
                )
        finally:
            self._driving = False

    def _on_line_spoken(self, index: int) -> None:
        if not self.is_playing or index != self.index:
            return
        self._speaking_index = None
        self.index += 1
        self._drive()

    def advance(self) -> bool:
        """Move to the next line.

        Returns:
            False when the script is finished
        """
        if self.is_finished:
            return False
        self.index += 1
        self._speaking_index = None
        if self.is_finished:
            self._finish()
            return False
        self._drive()
        return True

    def stop(self) -> None:
        """Pause playback; ``play()`` resumes from the current line."""
        self.is_playing = False
        self._speaking_index = None
        self.queue.stop()

    def record_mistake(self) -> None:
        self.mistakes += 1

    def _finish(self) -> None:
        was_playing = self.is_playing
        self.is_playing = False
        if self.ended_at is None:
            self.ended_at = datetime.now(UTC)
            logger.info(
                "Rehearsal finished",
                user_character_id=self.user_character_id,
                lines=len(self.lines),
                mistakes=self.mistakes,
            )
        if was_playing and self.on_complete:
            self.on_complete()

    def stats(self) -> PracticeStats:
        return PracticeStats(
            user_character_id=self.user_character_id,
            completed_lines=min(self.index, len(self.lines)),
            total_lines=len(self.lines),
            mistakes=self.mistakes,
            started_at=self.started_at,
            ended_at=self.ended_at,
        )
