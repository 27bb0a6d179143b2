"""
Trivia Quiz Recorder Package

Autoplays a timed trivia quiz in a Playwright-driven browser, answering
questions from a known answer bank, and records the session to video.
"""

__version__ = "1.0.0"
__author__ = "Quiz Recorder Team"

from .bank.answer_bank import AnswerBank, AnswerBankEntry
from .bank.resolver import SelectionDecision, resolve
from .config import GameConfig, TimingConfig
from .player.controller import QuestionLoopController
from .player.recorder import QuizRecorder, SessionResult

__all__ = [
    'AnswerBank',
    'AnswerBankEntry',
    'GameConfig',
    'QuestionLoopController',
    'QuizRecorder',
    'SelectionDecision',
    'SessionResult',
    'TimingConfig',
    'resolve'
]
