"""
Answer bank package.

Holds the answer bank loader and the resolver that picks an option
for each rendered question.
"""

from .answer_bank import AnswerBank, AnswerBankEntry, fetch_remote_bank, load_answer_bank, load_static_bank
from .resolver import SelectionDecision, resolve

__all__ = [
    'AnswerBank',
    'AnswerBankEntry',
    'SelectionDecision',
    'fetch_remote_bank',
    'load_answer_bank',
    'load_static_bank',
    'resolve'
]
