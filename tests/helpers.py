"""Shared builders for the quiz recorder tests."""

from quiz_recorder.bank.answer_bank import AnswerBank
from quiz_recorder.player.memory import ScriptedQuestion

FIFA_QUESTION = "Which country won the FIFA World Cup in 2022?"


def make_questions(count, prefix="Question number"):
    """Scripted questions whose correct answer is always the third option."""
    return [
        ScriptedQuestion(
            text=f"{prefix} {n}?",
            options=(f"A{n}", f"B{n}", f"C{n}", f"D{n}"),
            correct=f"C{n}"
        )
        for n in range(1, count + 1)
    ]


def bank_for(questions):
    return AnswerBank.from_records([{"question": q.text, "answer": q.correct} for q in questions])
