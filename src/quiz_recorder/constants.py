"""
Constants and default configuration values for the quiz recorder.

This module centralizes selectors, timing defaults and file locations
so the player, setup and recorder modules share a single source.
"""

# Target application UI contract
SELECTORS = {
    'quiz_container': '[data-testid="quiz-game-container"]',
    'question_counter': '[data-testid="question-counter"]',
    'question_text': '[data-testid="quiz-game-container"] .p-6 h2',
    'option': '[data-testid^="option-"]',
    'option_text': 'span.font-medium',
    'score': 'div:text("Score:")',
    'timer_toggle': '#timer-toggle',
    'timer_select': 'button[role="combobox"]',
    'timer_option': 'div[role="option"]:has-text("{seconds} seconds")',
    'game_button': 'button:has-text("{name}")',
    'play_button': 'button:has-text("Play Now")',
}

# Timing defaults, all in milliseconds
TIMING_DEFAULTS = {
    'answer_delay': 3000,
    'question_timeout': 10000,
    'stabilization_delay': 1000,
    'close_delay': 3000,
    'transition_timeout': 2000,
}

# Setup-phase pauses and timeouts (milliseconds)
SETUP_TIMEOUTS = {
    'page_load': 30000,
    'network_idle': 30000,
    'quiz_container': 30000,
    'timer_toggle_settle': 1000,
    'timer_select_settle': 500,
}

DEFAULT_TIMER_SECONDS = 15
DEFAULT_MAX_QUESTIONS = 10

# File Paths and Names
DEFAULT_PATHS = {
    'config_file': 'config/settings.json',
    'answers_file': 'config/answers.json',
    'video_dir': 'videos',
    'logs_dir': 'logs',
    'screenshot_pattern': 'debug-{name}.png',
}

DEFAULT_SETTINGS = {
    'app': {
        'base_url': 'http://localhost:3000',
        'games_path': '/games',
        'answers_endpoint': '/api/quiz/answers',
        'default_game_name': 'Daily Trivia',
        'default_game_path': 'daily-trivia',
    },
    'answer_bank': {
        'source': 'remote',
        'static_file': DEFAULT_PATHS['answers_file'],
        'request_timeout': 10,
    },
    'browser': {
        'headless': False,
        'slow_mo': 300,
        'devtools': False,
        'viewport': {'width': 1280, 'height': 720},
    },
    'recording': {
        'video_dir': DEFAULT_PATHS['video_dir'],
        'size': {'width': 1280, 'height': 720},
    },
    'timing': dict(TIMING_DEFAULTS),
    'session': {
        'automatic_mode': True,
        'specific_game': None,
        'enable_timer': False,
        'timer_seconds': DEFAULT_TIMER_SECONDS,
        'max_questions': DEFAULT_MAX_QUESTIONS,
    },
    'logging': {
        'level': 'INFO',
        'file': f"{DEFAULT_PATHS['logs_dir']}/recorder.log",
        'max_size': 10485760,
        'backup_count': 5,
    },
}

REQUIRED_PACKAGES = [
    ('playwright', 'Playwright browser automation'),
    ('aiohttp', 'Async HTTP requests'),
    ('tenacity', 'Retry mechanisms'),
]
