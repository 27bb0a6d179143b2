"""
Quiz recorder: one complete recorded session.

Loads the answer bank, launches Chromium with video recording, runs
session setup and the question loop, then tears the browser down. The
teardown always runs so the video file is finalized even after a failure.
"""

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright # type: ignore

from ..bank.answer_bank import AnswerBank, load_answer_bank
from ..config import GameConfig, TimingConfig
from ..exceptions import SessionSetupError
from .controller import QuestionLoopController
from .playwright_page import PlaywrightQuizPage
from .session_setup import SessionSetup


@dataclass
class SessionResult:
    questions_answered: int
    terminated_reason: str
    video_path: Optional[str] = None
    matched_count: int = 0
    random_count: int = 0
    last_score: Optional[int] = None


class QuizRecorder:
    """Runs and records a single quiz session."""

    def __init__(self, settings: Dict[str, Any], game: GameConfig, timing: TimingConfig,
                 max_questions: Optional[int] = None, answers_file: Optional[str] = None,
                 answers_url: Optional[str] = None, rng: Optional[random.Random] = None):
        self.logger = logging.getLogger(__name__)
        self.settings = settings
        self.game = game
        self.timing = timing
        self.max_questions = max_questions or settings['session']['max_questions']
        self.answers_file = answers_file
        self.answers_url = answers_url
        self.rng = rng

    async def record(self) -> SessionResult:
        """
        Run one session from answer bank load to video finalization.

        Raises:
            BankLoadError: If the answer bank cannot be loaded (the browser is never launched)
            SessionSetupError: If the page never reaches the quiz
        """
        bank = await load_answer_bank(self.settings, self.answers_file, self.answers_url)

        video_dir = Path(self.settings['recording']['video_dir'])
        video_dir.mkdir(parents=True, exist_ok=True)

        async with async_playwright() as playwright:
            browser, context, page = await self._open_browser(playwright)
            try:
                result = await self._run_session(page, bank)
            finally:
                await self._teardown(context, browser)

        self._log_session_summary(result)
        return result

    async def _open_browser(self, playwright: Playwright) -> Tuple[Browser, BrowserContext, Page]:
        browser_settings = self.settings['browser']
        recording = self.settings['recording']

        browser = await playwright.chromium.launch(
            headless=browser_settings['headless'],
            slow_mo=browser_settings['slow_mo'],
            devtools=browser_settings['devtools']
        )
        context = await browser.new_context(
            viewport=browser_settings['viewport'],
            record_video_dir=recording['video_dir'],
            record_video_size=recording['size']
        )
        page = await context.new_page()
        self.logger.info(f"🌐 Browser launched (headless={browser_settings['headless']}), recording to {recording['video_dir']}")
        return browser, context, page

    async def _run_session(self, page: Page, bank: AnswerBank) -> SessionResult:
        quiz_page = PlaywrightQuizPage(page)

        try:
            await SessionSetup(page, self.settings, self.game).prepare()
        except SessionSetupError:
            await quiz_page.capture_screenshot('setup-error')
            raise

        controller = QuestionLoopController(
            quiz_page, bank, self.timing, max_questions=self.max_questions, rng=self.rng
        )
        outcome = await controller.run()

        self.logger.info("✅ Quiz completed")
        self.logger.info(f"⏳ Closing in {self.timing.close_delay}ms...")
        await controller.pacer.pause('close_delay', self.timing.close_delay)

        video_path = None
        if page.video is not None:
            video_path = str(await page.video.path())
            self.logger.info(f"🎥 Video saved to: {video_path}")

        return SessionResult(
            questions_answered=outcome.questions_answered,
            terminated_reason=outcome.terminated_reason.value,
            video_path=video_path,
            matched_count=outcome.matched_count,
            random_count=outcome.random_count,
            last_score=outcome.last_score
        )

    async def _teardown(self, context: BrowserContext, browser: Browser) -> None:
        """Close the context (finalizes the video) and then the browser."""
        try:
            await context.close()
        except Exception as e:
            self.logger.error(f"❌ Error closing browser context: {e}")
        try:
            await browser.close()
            self.logger.info("✅ Browser closed")
        except Exception as e:
            self.logger.error(f"❌ Error closing browser: {e}")

    def _log_session_summary(self, result: SessionResult) -> None:
        self.logger.info("=" * 60)
        self.logger.info("QUIZ SESSION SUMMARY")
        self.logger.info("=" * 60)
        self.logger.info(f"Questions answered: {result.questions_answered}")
        self.logger.info(f"Answered from bank: {result.matched_count}")
        self.logger.info(f"Answered at random: {result.random_count}")
        self.logger.info(f"Last score seen: {result.last_score if result.last_score is not None else 'unknown'}")
        self.logger.info(f"Termination reason: {result.terminated_reason}")
        self.logger.info(f"Video: {result.video_path or 'not recorded'}")
