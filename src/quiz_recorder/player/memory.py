"""
In-memory quiz page.

A scripted stand-in for the live quiz page, used to exercise the question
loop without a browser. Questions are served in order; selecting an option
advances to the next one. What happens after the last question is chosen
with ``end_mode``:

- ``empty``: the question screen stays up with no options (no-options end)
- ``results``: the quiz container goes away (completed end)
- ``stall``: options never render again (timeout)
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from ..exceptions import QuizTimeoutError
from ..utils.text_processor import TextProcessor
from .base import BaseQuizPage, RenderedOption, RenderedQuestion

END_MODES = ('empty', 'results', 'stall')


@dataclass(frozen=True)
class ScriptedQuestion:
    text: str
    options: Tuple[str, ...]
    correct: Optional[str] = None


class InMemoryQuizPage(BaseQuizPage):

    def __init__(self, questions: Sequence[ScriptedQuestion], end_mode: str = 'empty',
                 stall_at: Optional[int] = None, fail_on_select_at: Optional[int] = None):
        super().__init__()
        if end_mode not in END_MODES:
            raise ValueError(f"end_mode must be one of {END_MODES} (got {end_mode!r})")
        self.questions = list(questions)
        self.end_mode = end_mode
        self.stall_at = stall_at
        self.fail_on_select_at = fail_on_select_at

        self.position = 0
        self.score = 0
        self.read_count = 0
        self.selections: List[Tuple[int, str]] = []
        self.screenshots: List[str] = []
        self.calls: List[str] = []

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.questions)

    @property
    def question_number(self) -> int:
        return self.position + 1

    def _current_text(self) -> str:
        return "" if self.exhausted else self.questions[self.position].text

    async def wait_for_options_visible(self, timeout_ms: int) -> None:
        self.calls.append('wait_for_options_visible')
        stalled = self.stall_at == self.question_number
        if stalled or (self.exhausted and self.end_mode != 'empty'):
            raise QuizTimeoutError(f"No answer options became visible within {timeout_ms}ms")

    async def read_question_state(self) -> RenderedQuestion:
        self.calls.append('read_question_state')
        self.read_count += 1
        if self.exhausted:
            options: Tuple[RenderedOption, ...] = ()
        else:
            options = tuple(
                RenderedOption(index=index, text=TextProcessor.clean_option_text(text), handle=(self.position, index))
                for index, text in enumerate(self.questions[self.position].options)
            )
        return RenderedQuestion(
            counter_label=f"Question {min(self.question_number, len(self.questions))} of {len(self.questions)}",
            question_text=self._current_text(),
            options=options,
            score_text=f"Score: {self.score}"
        )

    async def select_option(self, handle: Any) -> None:
        self.calls.append('select_option')
        position, index = handle
        if position != self.position:
            raise RuntimeError(f"Option handle for question {position + 1} is stale")
        if self.fail_on_select_at == self.question_number:
            raise RuntimeError(f"Option click failed on question {self.question_number}")

        question = self.questions[position]
        chosen = question.options[index]
        self.selections.append((self.question_number, chosen))
        if question.correct is not None and chosen.strip() == question.correct.strip():
            self.score += 1
        self.position += 1

    async def wait_for_question_change(self, previous_question_text: str, timeout_ms: int) -> bool:
        self.calls.append('wait_for_question_change')
        if self.exhausted and self.end_mode != 'empty':
            return False
        return self._current_text() != previous_question_text

    async def is_quiz_complete(self) -> bool:
        return self.exhausted and self.end_mode == 'results'

    async def capture_screenshot(self, name: str) -> Optional[str]:
        filename = TextProcessor.screenshot_filename(name)
        self.screenshots.append(filename)
        return filename
