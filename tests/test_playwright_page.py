"""
Tests for the Playwright quiz page adapter against a fake DOM.
"""

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from quiz_recorder.constants import SELECTORS
from quiz_recorder.exceptions import QuizTimeoutError
from quiz_recorder.player.playwright_page import PlaywrightQuizPage

from tests.helpers import FIFA_QUESTION


class FakeElement:
    """A located set of elements; ``texts`` holds one entry per match."""

    def __init__(self, dom, selector, texts, children=None):
        self.dom = dom
        self.selector = selector
        self.texts = texts
        self.children = children or []

    @property
    def first(self):
        return FakeElement(self.dom, self.selector, self.texts[:1], self.children[:1])

    async def count(self):
        return len(self.texts)

    async def text_content(self):
        return self.texts[0]

    def nth(self, index):
        return FakeElement(self.dom, f"{self.selector} >> nth={index}", [self.texts[index]],
                           [self.children[index]])

    def locator(self, selector):
        if selector == SELECTORS['option_text'] and self.children:
            return FakeElement(self.dom, selector, [self.children[0]])
        return FakeElement(self.dom, selector, [])

    async def click(self):
        self.dom.clicks.append(self.selector)


class FakeDomPage:
    def __init__(self, nodes=None, options=(), visible=True, changes=True, screenshot_error=None):
        self.nodes = nodes or {}
        self.options = list(options)
        self.visible = visible
        self.changes = changes
        self.screenshot_error = screenshot_error
        self.clicks = []
        self.screenshots = []
        self.function_args = None

    def locator(self, selector):
        if selector == SELECTORS['option']:
            return FakeElement(self, selector, [f"  {text}  " for text in self.options], self.options)
        return FakeElement(self, selector, self.nodes.get(selector, []))

    async def wait_for_selector(self, selector, state=None, timeout=None):
        if not self.visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    async def wait_for_function(self, expression, arg=None, timeout=None):
        self.function_args = arg
        if not self.changes:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded")

    async def screenshot(self, path=None, full_page=False):
        if self.screenshot_error is not None:
            raise self.screenshot_error
        self.screenshots.append(path)


def question_screen(**kwargs):
    return FakeDomPage(
        nodes={
            SELECTORS['quiz_container']: ["quiz"],
            SELECTORS['question_counter']: ["  Question 1 of 10 "],
            SELECTORS['question_text']: [FIFA_QUESTION],
            SELECTORS['score']: ["Score: 0 "],
        },
        options=("France", "Argentina", "Croatia", "Morocco"),
        **kwargs
    )


async def test_read_question_state():
    question = await PlaywrightQuizPage(question_screen()).read_question_state()

    assert question.counter_label == "Question 1 of 10"
    assert question.question_text == FIFA_QUESTION
    assert question.score_text == "Score: 0"
    assert [option.text for option in question.options] == ["France", "Argentina", "Croatia", "Morocco"]
    assert [option.index for option in question.options] == [0, 1, 2, 3]


async def test_missing_elements_read_as_empty():
    question = await PlaywrightQuizPage(FakeDomPage()).read_question_state()

    assert question.counter_label == ""
    assert question.question_text == ""
    assert not question.has_options


async def test_select_option_clicks_the_option_element():
    dom = question_screen()
    quiz_page = PlaywrightQuizPage(dom)
    question = await quiz_page.read_question_state()

    await quiz_page.select_option(question.options[1].handle)

    assert dom.clicks == [f"{SELECTORS['option']} >> nth=1"]


async def test_options_timeout_raises_quiz_timeout():
    with pytest.raises(QuizTimeoutError):
        await PlaywrightQuizPage(question_screen(visible=False)).wait_for_options_visible(50)


async def test_quiz_timeout_is_a_builtin_timeout():
    with pytest.raises(TimeoutError):
        await PlaywrightQuizPage(question_screen(visible=False)).wait_for_options_visible(50)


async def test_question_change_detection():
    dom = question_screen()

    assert await PlaywrightQuizPage(dom).wait_for_question_change(FIFA_QUESTION, 2000) is True
    assert dom.function_args == {'currentQuestion': FIFA_QUESTION, 'selector': SELECTORS['question_text']}
    assert await PlaywrightQuizPage(question_screen(changes=False)).wait_for_question_change(FIFA_QUESTION, 10) \
        is False


async def test_quiz_complete_when_container_is_gone():
    assert await PlaywrightQuizPage(question_screen()).is_quiz_complete() is False
    assert await PlaywrightQuizPage(FakeDomPage()).is_quiz_complete() is True


async def test_capture_screenshot():
    dom = question_screen()

    path = await PlaywrightQuizPage(dom).capture_screenshot("question-3-error")

    assert path == "debug-question-3-error.png"
    assert dom.screenshots == ["debug-question-3-error.png"]


async def test_screenshot_failure_is_logged_not_raised(caplog):
    dom = question_screen(screenshot_error=RuntimeError("Target page has been closed"))

    assert await PlaywrightQuizPage(dom).capture_screenshot("setup-error") is None
    assert "Failed to capture screenshot" in caplog.text
