import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from .config import GameConfig, TimingConfig, load_settings, validate_settings
from .constants import DEFAULT_PATHS
from .exceptions import BankLoadError, ConfigurationError, SessionSetupError
from .player.recorder import QuizRecorder
from .utils.environment import run_environment_check
from .utils.logging_setup import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Trivia Quiz Recorder')
    parser.add_argument('--config', type=str, default=DEFAULT_PATHS['config_file'],
                        help='Path to configuration file')
    parser.add_argument('--check-setup', action='store_true',
                        help='Validate directories, configuration, dependencies and browsers, then exit')

    # Session setup
    parser.add_argument('--direct', action='store_true',
                        help='Navigate straight to the game path instead of starting it from the lobby')
    parser.add_argument('--game', type=str, help='Game name (lobby mode) or game path (direct mode)')
    parser.add_argument('--enable-timer', dest='enable_timer', action='store_true', default=None,
                        help='Enable the per-question timer in the lobby')
    parser.add_argument('--no-timer', dest='enable_timer', action='store_false',
                        help='Leave the lobby timer untouched')
    parser.add_argument('--timer-seconds', type=int, help='Seconds per question when the timer is enabled')
    parser.add_argument('--max-questions', type=int, help='Maximum number of questions to answer (default: 10)')

    # Timing, all in milliseconds
    parser.add_argument('--answer-delay', type=int, help='Pause before selecting an answer (default: 3000)')
    parser.add_argument('--question-timeout', type=int, help='Max wait for a question to render (default: 10000)')
    parser.add_argument('--stabilization-delay', type=int, help='Pause for the UI to settle (default: 1000)')
    parser.add_argument('--close-delay', type=int, help='Pause before closing the browser (default: 3000)')
    parser.add_argument('--transition-timeout', type=int,
                        help='Max wait for the next question after answering (default: 2000)')

    # Answer bank
    bank_group = parser.add_mutually_exclusive_group()
    bank_group.add_argument('--answers-file', type=str, help='Load the answer bank from a JSON file')
    bank_group.add_argument('--answers-url', type=str, help='Fetch the answer bank from this URL')

    # Browser and output
    parser.add_argument('--headless', dest='headless', action='store_true', default=None,
                        help='Run the browser without a window')
    parser.add_argument('--headed', dest='headless', action='store_false',
                        help='Show the browser window even if the config says headless')
    parser.add_argument('--video-dir', type=str, help='Directory for the recorded video')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (overrides config)')
    return parser


def apply_arguments(settings: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Update settings with command line arguments."""
    session = settings['session']
    if args.direct:
        session['automatic_mode'] = False
    if args.game:
        session['specific_game'] = args.game
    if args.enable_timer is not None:
        session['enable_timer'] = args.enable_timer
    if args.timer_seconds is not None:
        session['timer_seconds'] = args.timer_seconds
    if args.max_questions is not None:
        if args.max_questions < 1:
            raise ConfigurationError(f"--max-questions must be at least 1 (got {args.max_questions})")
        session['max_questions'] = args.max_questions

    if args.headless is not None:
        settings['browser']['headless'] = args.headless
    if args.video_dir:
        settings['recording']['video_dir'] = args.video_dir
    if args.log_level:
        settings['logging']['level'] = args.log_level
    return settings


def build_timing(settings: Dict[str, Any], args: argparse.Namespace) -> TimingConfig:
    return TimingConfig.from_settings(settings).with_overrides(
        answer_delay=args.answer_delay,
        question_timeout=args.question_timeout,
        stabilization_delay=args.stabilization_delay,
        close_delay=args.close_delay,
        transition_timeout=args.transition_timeout
    )


async def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.check_setup:
        success = await run_environment_check(args.config)
        return 0 if success else 1

    try:
        settings = apply_arguments(load_settings(args.config), args)
        validate_settings(settings)
        timing = build_timing(settings, args)
        game = GameConfig.from_settings(settings)
    except ConfigurationError as e:
        print(f"❌ Error: {e}")
        return 1

    setup_logging(settings)
    logger = logging.getLogger(__name__)

    logger.info(f"🎬 Recording quiz ({'automatic' if game.automatic_mode else 'direct'} mode)")
    logger.debug(f"Timing: {timing}")

    recorder = QuizRecorder(
        settings, game, timing,
        answers_file=args.answers_file,
        answers_url=args.answers_url
    )

    try:
        result = await recorder.record()
    except BankLoadError as e:
        logger.error(f"❌ Error fetching quiz answers: {e}")
        return 1
    except SessionSetupError as e:
        logger.error(f"❌ Session setup failed: {e}")
        return 1
    except Exception as e:
        logger.error(f"❌ An error occurred: {e}", exc_info=True)
        return 1

    logger.info(f"🏁 Session finished: {result.terminated_reason}")
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()
