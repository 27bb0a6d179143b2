"""Exception types raised by the quiz recorder."""


class RecorderError(Exception):
    """Base class for all quiz recorder errors."""


class ConfigurationError(RecorderError):
    """Settings file or invocation options are missing or invalid."""


class BankLoadError(RecorderError):
    """The answer bank could not be loaded. Fatal: the quiz does not start."""


class QuizTimeoutError(RecorderError, TimeoutError):
    """Option elements did not render within the question timeout."""


class SessionSetupError(RecorderError):
    """The page never reached the "quiz started" state."""
