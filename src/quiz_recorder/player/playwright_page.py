"""
Playwright implementation of the quiz page boundary.

Reads the quiz application's question screen through the selectors in
``constants.SELECTORS`` and clicks options through Playwright locators.
"""

from typing import Any, Optional

from playwright.async_api import Locator, Page, TimeoutError as PlaywrightTimeoutError # type: ignore

from ..constants import SELECTORS
from ..exceptions import QuizTimeoutError
from ..utils.text_processor import TextProcessor
from .base import BaseQuizPage, RenderedOption, RenderedQuestion

QUESTION_CHANGED_JS = """
    (args) => {
        const questionEl = document.querySelector(args.selector);
        return questionEl ? questionEl.textContent !== args.currentQuestion : false;
    }
"""


class PlaywrightQuizPage(BaseQuizPage):
    """Quiz page adapter backed by a live Playwright ``Page``."""

    def __init__(self, page: Page):
        super().__init__()
        self.page = page

    async def wait_for_options_visible(self, timeout_ms: int) -> None:
        try:
            await self.page.wait_for_selector(SELECTORS['option'], state='visible', timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise QuizTimeoutError(f"No answer options became visible within {timeout_ms}ms") from e

    async def read_question_state(self) -> RenderedQuestion:
        counter_label = await self._text_of(self.page.locator(SELECTORS['question_counter']))
        question_text = await self._text_of(self.page.locator(SELECTORS['question_text']))
        score_text = await self._text_of(self.page.locator(SELECTORS['score']))

        option_locator = self.page.locator(SELECTORS['option'])
        option_count = await option_locator.count()

        options = []
        for index in range(option_count):
            element = option_locator.nth(index)
            raw_text = await self._text_of(element.locator(SELECTORS['option_text']))
            options.append(RenderedOption(
                index=index,
                text=TextProcessor.clean_option_text(raw_text),
                handle=element
            ))

        return RenderedQuestion(
            counter_label=counter_label.strip(),
            question_text=question_text,
            options=tuple(options),
            score_text=score_text.strip()
        )

    async def select_option(self, handle: Any) -> None:
        await handle.click()

    async def wait_for_question_change(self, previous_question_text: str, timeout_ms: int) -> bool:
        try:
            await self.page.wait_for_function(
                QUESTION_CHANGED_JS,
                arg={'currentQuestion': previous_question_text, 'selector': SELECTORS['question_text']},
                timeout=timeout_ms
            )
            return True
        except PlaywrightTimeoutError:
            return False

    async def is_quiz_complete(self) -> bool:
        return await self.page.locator(SELECTORS['quiz_container']).count() == 0

    async def capture_screenshot(self, name: str) -> Optional[str]:
        screenshot_path = TextProcessor.screenshot_filename(name)
        try:
            await self.page.screenshot(path=screenshot_path, full_page=True)
        except Exception as e:
            self.logger.error(f"❌ Failed to capture screenshot: {e}")
            return None
        self.logger.info(f"📸 Screenshot captured: {screenshot_path}")
        return screenshot_path

    async def _text_of(self, locator: Locator) -> str:
        """Text content of the first match, or "" when nothing matches."""
        first = locator.first
        if await first.count() == 0:
            return ""
        return await first.text_content() or ""
