"""
Session setup: bring the page to the "quiz started" state.

Two entry modes are supported. Automatic mode opens the games lobby,
optionally configures the per-question timer and starts a game by name
(or the first "Play Now" game). Direct mode navigates straight to a game
path. Either way the page is ready once the quiz container is present.
"""

import asyncio
import logging
from typing import Any, Dict

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError # type: ignore
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type # type: ignore

from ..config import GameConfig
from ..constants import DEFAULT_TIMER_SECONDS, SELECTORS, SETUP_TIMEOUTS
from ..exceptions import SessionSetupError


class SessionSetup:

    def __init__(self, page: Page, settings: Dict[str, Any], game: GameConfig):
        self.logger = logging.getLogger(__name__)
        self.page = page
        self.settings = settings
        self.game = game
        self.base_url = settings['app']['base_url'].rstrip('/')

    async def prepare(self) -> None:
        """
        Run the configured entry mode and wait for the quiz container.

        Raises:
            SessionSetupError: If navigation keeps timing out or the quiz never appears
        """
        try:
            if self.game.automatic_mode:
                await self._setup_automatic_mode()
            else:
                await self._setup_direct_mode()
        except PlaywrightTimeoutError as e:
            raise SessionSetupError(f"Navigation timed out during session setup: {e}") from e

        try:
            await self.page.wait_for_selector(SELECTORS['quiz_container'], timeout=SETUP_TIMEOUTS['quiz_container'])
        except PlaywrightTimeoutError as e:
            raise SessionSetupError("Quiz container did not appear - the quiz did not start") from e
        self.logger.info("🎮 Quiz started")

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=2, max=8),
        retry=retry_if_exception_type((PlaywrightTimeoutError,)),
        reraise=True
    )
    async def _goto(self, url: str) -> None:
        self.logger.debug(f"Navigating to {url}")
        await self.page.goto(url, timeout=SETUP_TIMEOUTS['page_load'])
        await self.page.wait_for_load_state('networkidle', timeout=SETUP_TIMEOUTS['network_idle'])

    async def _setup_automatic_mode(self) -> None:
        await self._goto(f"{self.base_url}{self.settings['app']['games_path']}")

        if self.game.enable_timer:
            await self._configure_timer()

        game_name = self.game.specific_game or self.settings['app']['default_game_name']
        self.logger.info("🎮 Starting game...")
        game_button = self.page.locator(SELECTORS['game_button'].format(name=game_name))

        if await game_button.count() > 0:
            self.logger.info(f"🎮 Starting {game_name}...")
            await game_button.first.click()
        else:
            self.logger.info("🕹️ Starting the first available game...")
            play_button = self.page.locator(SELECTORS['play_button'])
            if await play_button.count() == 0:
                raise SessionSetupError(f"No button found for game '{game_name}' and no 'Play Now' button")
            await play_button.first.click()

        await self.page.wait_for_load_state('networkidle', timeout=SETUP_TIMEOUTS['network_idle'])

    async def _setup_direct_mode(self) -> None:
        game_path = self.game.specific_game or self.settings['app']['default_game_path']
        self.logger.info(f"🎮 Starting game directly: {game_path}")
        await self._goto(f"{self.base_url}{self.settings['app']['games_path']}/{game_path}")

    async def _configure_timer(self) -> None:
        """Enable the timer and pick the per-question duration; missing controls keep the defaults."""
        self.logger.info("⚙️ Configuring timer...")

        timer_toggle = self.page.locator(SELECTORS['timer_toggle'])
        if await timer_toggle.count() == 0:
            self.logger.warning("⚠️ Timer toggle not found, keeping the lobby's timer settings")
            return

        if await timer_toggle.get_attribute('aria-checked') == 'false':
            self.logger.info("🕒 Enabling timer...")
            await timer_toggle.click()
            await asyncio.sleep(SETUP_TIMEOUTS['timer_toggle_settle'] / 1000)

        seconds = self.game.timer_seconds
        self.logger.info(f"⏱️ Configuring time per question to {seconds} seconds...")
        time_selector = self.page.locator(SELECTORS['timer_select']).first
        if await time_selector.count() == 0:
            self.logger.warning("⚠️ Time selector not found, using default")
            return
        await time_selector.click()
        await asyncio.sleep(SETUP_TIMEOUTS['timer_select_settle'] / 1000)

        time_option = self.page.locator(SELECTORS['timer_option'].format(seconds=seconds))
        if await time_option.count() > 0:
            await time_option.first.click()
            self.logger.info(f"✅ Time set to {seconds} seconds")
        else:
            self.logger.warning(f"⚠️ Time option {seconds} seconds not found, using default")
            default_option = self.page.locator(SELECTORS['timer_option'].format(seconds=DEFAULT_TIMER_SECONDS))
            if await default_option.count() > 0:
                await default_option.first.click()

        await asyncio.sleep(SETUP_TIMEOUTS['timer_select_settle'] / 1000)
