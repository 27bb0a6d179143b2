"""
Quiz player modules.

This package contains the quiz page boundary (live Playwright and
in-memory implementations), the question loop controller, session setup
and the recorder that ties one recorded session together.
"""

from .base import BaseQuizPage, RenderedOption, RenderedQuestion
from .controller import LoopOutcome, LoopState, QuestionLoopController, TerminationReason
from .memory import InMemoryQuizPage, ScriptedQuestion
from .playwright_page import PlaywrightQuizPage
from .recorder import QuizRecorder, SessionResult
from .session_setup import SessionSetup

__all__ = [
    'BaseQuizPage',
    'InMemoryQuizPage',
    'LoopOutcome',
    'LoopState',
    'PlaywrightQuizPage',
    'QuestionLoopController',
    'QuizRecorder',
    'RenderedOption',
    'RenderedQuestion',
    'ScriptedQuestion',
    'SessionResult',
    'SessionSetup',
    'TerminationReason'
]
