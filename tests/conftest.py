import random

import pytest

from quiz_recorder.bank.answer_bank import AnswerBank
from quiz_recorder.config import TimingConfig

from tests.helpers import FIFA_QUESTION


@pytest.fixture
def fast_timing():
    """Timing with every pause at zero so loop tests run instantly."""
    return TimingConfig(answer_delay=0, question_timeout=50, stabilization_delay=0,
                        close_delay=0, transition_timeout=10)


@pytest.fixture
def fifa_bank():
    return AnswerBank.from_records([{"question": FIFA_QUESTION, "answer": "Argentina"}])


@pytest.fixture
def rng():
    return random.Random(1234)
