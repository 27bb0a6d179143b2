"""
Answer bank loading.

The answer bank is an ordered, immutable collection of question matchers
and their correct answer text. It is loaded once at session start, either
from a static JSON list or from the quiz application's answers endpoint,
and is then passed explicitly to the resolver and loop controller.
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

import aiohttp # type: ignore

from ..exceptions import BankLoadError

logger = logging.getLogger(__name__)

Matcher = Union[str, re.Pattern]


@dataclass(frozen=True)
class AnswerBankEntry:
    """One known question-to-answer correspondence."""

    matcher: Matcher
    answer: str

    def __post_init__(self):
        pattern_text = self.matcher.pattern if isinstance(self.matcher, re.Pattern) else self.matcher
        if not pattern_text.strip():
            raise BankLoadError("Answer bank entry has an empty question matcher")

    @property
    def is_pattern(self) -> bool:
        return isinstance(self.matcher, re.Pattern)

    def matches(self, question_text: str) -> bool:
        """
        Exact-text matchers match when contained in the question text;
        pattern matchers match when the pattern is found anywhere in it.
        """
        if self.is_pattern:
            return self.matcher.search(question_text) is not None
        return self.matcher in question_text


class AnswerBank:
    """Ordered, read-only sequence of ``AnswerBankEntry`` objects."""

    def __init__(self, entries: Iterable[AnswerBankEntry] = (), source: str = "literal"):
        self._entries: Tuple[AnswerBankEntry, ...] = tuple(entries)
        self.source = source

    @property
    def entries(self) -> Tuple[AnswerBankEntry, ...]:
        return self._entries

    def __iter__(self) -> Iterator[AnswerBankEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"AnswerBank(entries={len(self._entries)}, source={self.source!r})"

    def find(self, question_text: str) -> Optional[AnswerBankEntry]:
        """Return the first entry in bank order matching ``question_text``."""
        for entry in self._entries:
            if entry.matches(question_text):
                return entry
        return None

    @classmethod
    def from_records(cls, records: Any, source: str = "literal") -> 'AnswerBank':
        """
        Build a bank from a list of record mappings.

        Each record holds an ``answer`` plus either an exact ``question`` text or
        a regular expression ``pattern``. Records in the answers endpoint format
        (``pregunta``/``respuesta``) are accepted as exact-text entries.

        Raises:
            BankLoadError: If the payload is not a list or a record is malformed
        """
        if not isinstance(records, list):
            raise BankLoadError(f"Answer bank from {source} must be a list, got {type(records).__name__}")

        entries = []
        for position, record in enumerate(records):
            entries.append(_entry_from_record(record, position, source))
        return cls(entries, source=source)


def _entry_from_record(record: Any, position: int, source: str) -> AnswerBankEntry:
    if not isinstance(record, Mapping):
        raise BankLoadError(f"Answer bank record {position} from {source} is not an object: {record!r}")

    answer = record.get('answer', record.get('respuesta'))
    if not isinstance(answer, str):
        raise BankLoadError(f"Answer bank record {position} from {source} is missing its answer text")

    if 'pattern' in record:
        if not isinstance(record['pattern'], str):
            raise BankLoadError(f"Answer bank record {position} from {source} has a non-text pattern")
        try:
            matcher: Matcher = re.compile(record['pattern'])
        except re.error as e:
            raise BankLoadError(f"Answer bank record {position} from {source} has an invalid pattern: {e}") from e
    else:
        matcher = record.get('question', record.get('pregunta'))
        if not isinstance(matcher, str):
            raise BankLoadError(f"Answer bank record {position} from {source} is missing its question text")

    try:
        return AnswerBankEntry(matcher=matcher, answer=answer)
    except BankLoadError as e:
        raise BankLoadError(f"Answer bank record {position} from {source}: {e}") from e


def load_static_bank(file_path: str) -> AnswerBank:
    """Load an answer bank from a JSON array file."""
    path = Path(file_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            records = json.load(f)
    except FileNotFoundError as e:
        raise BankLoadError(f"Answer bank file not found: {file_path}") from e
    except OSError as e:
        raise BankLoadError(f"Answer bank file {file_path} could not be read: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BankLoadError(f"Answer bank file {file_path} is not valid JSON: {e}") from e

    return AnswerBank.from_records(records, source=str(path))


async def fetch_remote_bank(url: str, timeout: float = 10) -> AnswerBank:
    """
    Fetch the answer bank from the quiz application's answers endpoint.

    The endpoint returns a JSON array of ``{pregunta, respuesta}`` objects.
    There is no retry: a failed fetch is fatal to the session.

    Raises:
        BankLoadError: On connection failure, non-2xx status or malformed payload
    """
    logger.debug(f"Fetching answer bank from {url}")
    try:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
            async with session.get(url) as response:
                if not 200 <= response.status < 300:
                    raise BankLoadError(
                        f"Failed to fetch quiz answers: HTTP {response.status} {response.reason or ''}".strip()
                    )
                try:
                    records = await response.json(content_type=None)
                except (json.JSONDecodeError, UnicodeDecodeError, aiohttp.ContentTypeError) as e:
                    raise BankLoadError(f"Quiz answers response from {url} is not valid JSON: {e}") from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise BankLoadError(f"Failed to fetch quiz answers from {url}: {e}") from e

    if isinstance(records, list):
        for position, record in enumerate(records):
            if not isinstance(record, Mapping) or 'pregunta' not in record or 'respuesta' not in record:
                raise BankLoadError(f"Quiz answer {position} from {url} is missing 'pregunta' or 'respuesta'")

    return AnswerBank.from_records(records, source=url)


async def load_answer_bank(settings: Dict[str, Any], answers_file: Optional[str] = None,
                           answers_url: Optional[str] = None) -> AnswerBank:
    """
    Load the session's answer bank according to settings and overrides.

    An explicit ``answers_file`` or ``answers_url`` wins over the configured
    ``answer_bank.source``.
    """
    bank_settings = settings['answer_bank']

    if answers_file:
        bank = load_static_bank(answers_file)
    elif answers_url:
        bank = await fetch_remote_bank(answers_url, bank_settings.get('request_timeout', 10))
    elif bank_settings.get('source') == 'static':
        bank = load_static_bank(bank_settings['static_file'])
    else:
        url = f"{settings['app']['base_url'].rstrip('/')}{settings['app']['answers_endpoint']}"
        bank = await fetch_remote_bank(url, bank_settings.get('request_timeout', 10))

    if bank:
        logger.info(f"✅ Loaded {len(bank)} quiz answers from {bank.source}")
    else:
        logger.warning(f"⚠️ Answer bank from {bank.source} is empty - every question will be answered at random")
    return bank
