from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple
import logging


@dataclass(frozen=True)
class RenderedOption:
    index: int
    text: str
    # Opaque to the core; only the page adapter that produced it knows what it is.
    handle: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class RenderedQuestion:
    """Snapshot of the question currently on screen."""

    counter_label: str
    question_text: str
    options: Tuple[RenderedOption, ...]
    score_text: str

    @property
    def has_options(self) -> bool:
        return bool(self.options)


class BaseQuizPage(ABC):
    """
    DOM extraction and selection boundary used by the question loop.

    Implementations read the live quiz page (or a scripted stand-in) and
    perform the selection action. Every wait carries an explicit timeout.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    async def wait_for_options_visible(self, timeout_ms: int) -> None:
        """Wait for option elements to appear; raise QuizTimeoutError otherwise."""
        pass

    @abstractmethod
    async def read_question_state(self) -> RenderedQuestion:
        """Snapshot counter, question text, options and score."""
        pass

    @abstractmethod
    async def select_option(self, handle: Any) -> None:
        """Choose the option identified by ``handle``."""
        pass

    @abstractmethod
    async def wait_for_question_change(self, previous_question_text: str, timeout_ms: int) -> bool:
        """Return True once the question text differs, False on timeout."""
        pass

    async def is_quiz_complete(self) -> bool:
        """Whether the quiz has left the question screen for good."""
        return False

    async def capture_screenshot(self, name: str) -> Optional[str]:
        """Save a diagnostic screenshot named ``debug-<name>.png``; return its path."""
        return None
