"""
Question loop controller.

Runs one quiz session against a quiz page: wait for a question, read it,
resolve the answer, pause, select, then watch for the next question.
Every step of an iteration completes before the next one starts, and a
question is attempted exactly once.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..bank.answer_bank import AnswerBank
from ..bank.resolver import resolve
from ..config import TimingConfig
from ..constants import DEFAULT_MAX_QUESTIONS
from ..exceptions import QuizTimeoutError
from ..utils.pacing import Pacer
from ..utils.text_processor import TextProcessor
from .base import BaseQuizPage


class LoopState(Enum):
    AWAITING_QUESTION = 'AwaitingQuestion'
    EXTRACTING = 'Extracting'
    RESOLVING = 'Resolving'
    DELAYING = 'Delaying'
    SELECTING = 'Selecting'
    AWAITING_TRANSITION = 'AwaitingTransition'
    TERMINATED = 'Terminated'


class TerminationReason(str, Enum):
    COMPLETED = 'completed'
    NO_OPTIONS = 'no-options'
    ERROR = 'error'
    MAX_REACHED = 'max-reached'


@dataclass
class LoopOutcome:
    questions_answered: int = 0
    matched_count: int = 0
    random_count: int = 0
    terminated_reason: Optional[TerminationReason] = None
    last_score: Optional[int] = None


class QuestionLoopController:
    """Drives the question-answering loop for one session."""

    def __init__(self, page: BaseQuizPage, bank: AnswerBank, timing: TimingConfig,
                 max_questions: int = DEFAULT_MAX_QUESTIONS, rng: Optional[random.Random] = None,
                 pacer: Optional[Pacer] = None):
        if max_questions < 1:
            raise ValueError(f"max_questions must be at least 1 (got {max_questions})")
        self.logger = logging.getLogger(__name__)
        self.page = page
        self.bank = bank
        self.timing = timing
        self.max_questions = max_questions
        self.rng = rng or random.Random()
        self.pacer = pacer or Pacer()
        self.state = LoopState.AWAITING_QUESTION
        self.outcome = LoopOutcome()

    async def run(self) -> LoopOutcome:
        """Answer questions until the quiz ends, an error occurs or the cap is reached."""
        for question_number in range(1, self.max_questions + 1):
            try:
                reason = await self._answer_question(question_number)
            except QuizTimeoutError as e:
                self.logger.error(f"⚠️ Timed out waiting for question {question_number}: {e}")
                await self.page.capture_screenshot(f"question-{question_number}-error")
                return self._terminate(TerminationReason.ERROR)
            except Exception as e:
                self.logger.error(f"⚠️ Error on question {question_number}: {e}")
                self.logger.debug("Question loop error details:", exc_info=True)
                await self.page.capture_screenshot(f"question-{question_number}-error")
                return self._terminate(TerminationReason.ERROR)

            if reason is not None:
                return self._terminate(reason)

        self.logger.info(f"🏁 Reached the limit of {self.max_questions} questions")
        return self._terminate(TerminationReason.MAX_REACHED)

    async def _answer_question(self, question_number: int) -> Optional[TerminationReason]:
        """
        Run one iteration of the loop.

        Returns:
            A termination reason when the session should stop, otherwise None
        """
        self.logger.info(f"=== Question {question_number} ===")

        self.state = LoopState.AWAITING_QUESTION
        await self.page.wait_for_options_visible(self.timing.question_timeout)
        await self.pacer.pause('stabilization', self.timing.stabilization_delay)

        self.state = LoopState.EXTRACTING
        question = await self.page.read_question_state()
        counter = TextProcessor.parse_counter(question.counter_label)
        position = f"{counter[0]}/{counter[1]}" if counter else question.counter_label or str(question_number)
        self.logger.info(f"📝 Question {position}: {question.question_text}")
        score = TextProcessor.parse_score(question.score_text)
        if score is not None:
            self.outcome.last_score = score
        self.logger.info(f"🏆 Current score: {score if score is not None else question.score_text}")

        if not question.has_options:
            self.logger.warning("⚠️ No options found. Quiz finished.")
            return TerminationReason.NO_OPTIONS

        self.logger.info(f"📋 Available options ({len(question.options)}):")
        for option in question.options:
            self.logger.info(f"  {option.index + 1}. {option.text}")

        self.state = LoopState.RESOLVING
        decision = resolve(question.question_text, question.options, self.bank, self.rng)
        selected = next(option for option in question.options if option.index == decision.chosen_index)
        if decision.matched_bank:
            self.outcome.matched_count += 1
        else:
            self.outcome.random_count += 1
        self.logger.info(f"✅ Selecting: \"{selected.text}\"")

        self.state = LoopState.DELAYING
        self.logger.info(f"⏳ Waiting {self.timing.answer_delay}ms before selecting...")
        await self.pacer.pause('answer_delay', self.timing.answer_delay)

        self.state = LoopState.SELECTING
        self.logger.info("🖱️ Selecting option...")
        await self.page.select_option(selected.handle)
        self.outcome.questions_answered += 1
        await self.pacer.pause('stabilization', self.timing.stabilization_delay)

        self.state = LoopState.AWAITING_TRANSITION
        changed = await self.page.wait_for_question_change(question.question_text, self.timing.transition_timeout)
        if changed:
            self.logger.info("✅ Question changed")
            return None

        self.logger.warning("⚠️ No question change detected, might be the last question")
        if await self.page.is_quiz_complete():
            self.logger.info("🏁 Quiz screen closed - quiz complete")
            return TerminationReason.COMPLETED
        return None

    def _terminate(self, reason: TerminationReason) -> LoopOutcome:
        self.state = LoopState.TERMINATED
        self.outcome.terminated_reason = reason
        self.logger.info(f"Question loop terminated: {reason.value}")
        return self.outcome
