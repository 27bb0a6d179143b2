"""
Environment checks for the quiz recorder.

Creates the output directories, validates the settings file and checks
that the required packages and the Chromium browser are available.
Run through ``quiz-recorder --check-setup``.
"""

import importlib
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import load_settings
from ..constants import REQUIRED_PACKAGES
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def create_directories(settings: Dict[str, Any]) -> List[str]:
    """Create the video and log directories; return the paths ensured."""
    directories = [settings['recording']['video_dir']]
    log_dir = str(Path(settings['logging']['file']).parent)
    if log_dir not in ('', '.'):
        directories.append(log_dir)

    print("Creating directory structure...")
    for directory in directories:
        Path(directory).mkdir(parents=True, exist_ok=True)
        print(f"  ✓ Created: {directory}")
    return directories


def validate_config_file(config_path: Optional[str]) -> Optional[Dict[str, Any]]:
    """Load and validate the settings file; return the settings or None."""
    print("\nValidating configuration file...")
    try:
        settings = load_settings(config_path)
    except ConfigurationError as e:
        print(f"  ❌ {e}")
        return None
    print(f"  ✓ Validated: {config_path or 'built-in defaults'}")
    return settings


def check_dependencies() -> bool:
    """Check that every required package imports."""
    print("\nChecking dependencies...")
    missing = []
    for package, description in REQUIRED_PACKAGES:
        try:
            importlib.import_module(package)
            print(f"  ✓ {package:<12} - {description}")
        except ImportError:
            missing.append(package)
            print(f"  ❌ {package:<12} - {description} (MISSING)")

    if missing:
        print(f"\nMissing packages: {', '.join(missing)}")
        print("Install with: pip install -e .")
        return False
    return True


async def check_playwright_browser() -> bool:
    """Check that Chromium can be launched."""
    print("\nChecking Playwright browsers...")
    try:
        from playwright.async_api import async_playwright # type: ignore
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(headless=True)
            await browser.close()
    except Exception as e:
        logger.debug("Chromium launch failed", exc_info=True)
        print(f"  ❌ Chromium browser check failed: {e}")
        print("Install with: playwright install chromium")
        return False
    print("  ✓ Chromium browser working correctly")
    return True


async def run_environment_check(config_path: Optional[str]) -> bool:
    """Run every check and print a summary. Returns overall success."""
    print("🚀 Quiz Recorder Setup Check")
    print("=" * 40)

    settings = validate_config_file(config_path)
    if settings is None:
        print("\n❌ Setup failed: Configuration file errors")
        return False

    create_directories(settings)

    if not check_dependencies():
        print("\n❌ Setup failed: Missing dependencies")
        return False

    browser_ok = await check_playwright_browser()

    print("\n" + "=" * 40)
    if browser_ok:
        print("✅ Setup completed successfully!")
    else:
        print("❌ Setup incomplete: install the Chromium browser")
    return browser_ok
