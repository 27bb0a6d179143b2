"""
Tests for the question loop controller against the in-memory quiz page.
"""

import random

import pytest

from quiz_recorder.bank.answer_bank import AnswerBank
from quiz_recorder.bank.resolver import SelectionDecision
from quiz_recorder.player.controller import LoopState, QuestionLoopController, TerminationReason
from quiz_recorder.player.memory import InMemoryQuizPage, ScriptedQuestion
from quiz_recorder.utils.pacing import Pacer

from tests.helpers import FIFA_QUESTION, bank_for, make_questions


def controller_for(page, bank, timing, **kwargs):
    kwargs.setdefault('rng', random.Random(7))
    return QuestionLoopController(page, bank, timing, **kwargs)


class TestNormalEndings:

    async def test_answers_every_question_then_stops_on_empty_options(self, fast_timing):
        questions = make_questions(3)
        page = InMemoryQuizPage(questions, end_mode='empty')
        controller = controller_for(page, bank_for(questions), fast_timing)

        outcome = await controller.run()

        assert outcome.terminated_reason is TerminationReason.NO_OPTIONS
        assert outcome.questions_answered == 3
        assert outcome.matched_count == 3
        assert outcome.random_count == 0
        assert page.selections == [(1, "C1"), (2, "C2"), (3, "C3")]
        assert page.score == 3
        assert outcome.last_score == 3
        assert page.screenshots == []
        assert controller.state is LoopState.TERMINATED

    async def test_results_screen_ends_as_completed(self, fast_timing):
        questions = make_questions(2)
        page = InMemoryQuizPage(questions, end_mode='results')

        outcome = await controller_for(page, bank_for(questions), fast_timing).run()

        assert outcome.terminated_reason is TerminationReason.COMPLETED
        assert outcome.questions_answered == 2
        assert page.read_count == 2

    async def test_trace_shows_parsed_counter_and_score(self, fast_timing, caplog):
        questions = make_questions(2)
        page = InMemoryQuizPage(questions, end_mode='results')

        with caplog.at_level("INFO", logger="quiz_recorder.player.controller"):
            outcome = await controller_for(page, bank_for(questions), fast_timing).run()

        assert "📝 Question 2/2: Question number 2?" in caplog.text
        assert "🏆 Current score: 1" in caplog.text
        assert outcome.last_score == 1

    async def test_empty_options_never_reach_the_resolver(self, fast_timing, monkeypatch):
        seen = []

        def fake_resolve(question_text, options, bank, rng=None):
            assert options, "resolve() called with empty options"
            seen.append(question_text)
            return SelectionDecision(chosen_index=0, matched_bank=False)

        monkeypatch.setattr('quiz_recorder.player.controller.resolve', fake_resolve)
        page = InMemoryQuizPage(make_questions(1), end_mode='empty')

        outcome = await controller_for(page, AnswerBank(), fast_timing).run()

        assert outcome.terminated_reason is TerminationReason.NO_OPTIONS
        assert seen == ["Question number 1?"]

    async def test_quiz_with_no_questions(self, fast_timing):
        page = InMemoryQuizPage([], end_mode='empty')

        outcome = await controller_for(page, AnswerBank(), fast_timing).run()

        assert outcome.terminated_reason is TerminationReason.NO_OPTIONS
        assert outcome.questions_answered == 0


class TestIterationCap:

    async def test_default_cap_stops_after_ten(self, fast_timing):
        questions = make_questions(15)
        page = InMemoryQuizPage(questions)

        outcome = await controller_for(page, bank_for(questions), fast_timing).run()

        assert outcome.terminated_reason is TerminationReason.MAX_REACHED
        assert outcome.questions_answered == 10
        assert page.read_count == 10

    async def test_custom_cap(self, fast_timing):
        page = InMemoryQuizPage(make_questions(5))

        outcome = await controller_for(page, AnswerBank(), fast_timing, max_questions=2).run()

        assert outcome.terminated_reason is TerminationReason.MAX_REACHED
        assert page.read_count == 2

    def test_cap_must_be_positive(self, fast_timing):
        with pytest.raises(ValueError):
            QuestionLoopController(InMemoryQuizPage([]), AnswerBank(), fast_timing, max_questions=0)


class TestFailures:

    async def test_timeout_on_third_question(self, fast_timing):
        questions = make_questions(5)
        page = InMemoryQuizPage(questions, stall_at=3)

        outcome = await controller_for(page, bank_for(questions), fast_timing).run()

        assert outcome.terminated_reason is TerminationReason.ERROR
        assert outcome.questions_answered == 2
        assert page.screenshots == ["debug-question-3-error.png"]

    async def test_options_never_render_after_last_question(self, fast_timing):
        questions = make_questions(2)
        page = InMemoryQuizPage(questions, end_mode='stall')

        outcome = await controller_for(page, bank_for(questions), fast_timing).run()

        assert outcome.terminated_reason is TerminationReason.ERROR
        assert outcome.questions_answered == 2
        assert page.screenshots == ["debug-question-3-error.png"]

    async def test_unexpected_error_aborts_without_retry(self, fast_timing):
        page = InMemoryQuizPage(make_questions(4), fail_on_select_at=2)

        outcome = await controller_for(page, AnswerBank(), fast_timing).run()

        assert outcome.terminated_reason is TerminationReason.ERROR
        assert outcome.questions_answered == 1
        assert page.calls.count('select_option') == 2
        assert page.read_count == 2
        assert page.screenshots == ["debug-question-2-error.png"]


class TestOrderingAndPacing:

    async def test_iteration_order(self, fast_timing):
        page = InMemoryQuizPage(make_questions(1), end_mode='empty')

        await controller_for(page, AnswerBank(), fast_timing).run()

        assert page.calls == [
            'wait_for_options_visible',
            'read_question_state',
            'select_option',
            'wait_for_question_change',
            'wait_for_options_visible',
            'read_question_state',
        ]

    async def test_named_pauses_use_timing_config(self, fast_timing):
        timing = fast_timing.with_overrides(answer_delay=5, stabilization_delay=3)
        pacer = Pacer()
        page = InMemoryQuizPage(make_questions(1), end_mode='empty')

        await controller_for(page, AnswerBank(), timing, pacer=pacer).run()

        assert pacer.history == [
            ('stabilization', 3),
            ('answer_delay', 5),
            ('stabilization', 3),
            ('stabilization', 3),
        ]
        assert pacer.pauses_named('answer_delay') == [5]


class TestFifaScenarios:

    async def test_bank_answer_is_clicked(self, fast_timing, fifa_bank):
        question = ScriptedQuestion(FIFA_QUESTION, ("Argentina", "Brazil", "France", "Germany"), "Argentina")
        page = InMemoryQuizPage([question])

        outcome = await controller_for(page, fifa_bank, fast_timing).run()

        assert page.selections == [(1, "Argentina")]
        assert outcome.matched_count == 1

    async def test_missing_answer_falls_back_to_random(self, fast_timing, fifa_bank):
        question = ScriptedQuestion(FIFA_QUESTION, ("Brazil", "France"))
        page = InMemoryQuizPage([question])

        outcome = await controller_for(page, fifa_bank, fast_timing).run()

        assert page.selections[0][1] in ("Brazil", "France")
        assert outcome.random_count == 1
        assert outcome.matched_count == 0
