"""
Answer resolution.

Chooses which rendered option to select for a question. Question matching
against the bank is loose (substring or pattern) while the answer match is
strict (exact after trimming, case-sensitive). Anything that does not line
up falls back to a uniformly random option.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from .answer_bank import AnswerBank

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionDecision:
    chosen_index: int
    matched_bank: bool
    answer: Optional[str] = None


def resolve(question_text: str, options: Sequence, bank: AnswerBank,
            rng: Optional[random.Random] = None) -> SelectionDecision:
    """
    Decide which option to select.

    Args:
        question_text: Question text as rendered on the page
        options: Ordered rendered options, each exposing ``index`` and ``text``
        bank: The session's answer bank
        rng: Random source for the fallback choice (module ``random`` if omitted)

    Returns:
        SelectionDecision with the chosen option's index

    Raises:
        ValueError: If ``options`` is empty
    """
    if not options:
        raise ValueError("resolve() requires at least one option")

    entry = bank.find(question_text)
    if entry is not None:
        expected = entry.answer.strip()
        logger.debug(f"🔍 Looking for answer: \"{expected}\"")
        for option in options:
            if option.text.strip() == expected:
                return SelectionDecision(chosen_index=option.index, matched_bank=True, answer=expected)
        logger.warning(f"⚠️ Answer \"{expected}\" is not among the options, selecting randomly")
    else:
        logger.warning("⚠️ Correct answer not found in the answer bank, selecting randomly")

    chooser = rng or random
    fallback = options[chooser.randrange(len(options))]
    return SelectionDecision(chosen_index=fallback.index, matched_bank=False)
