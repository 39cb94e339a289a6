"""Release families: one package name per supported major line.

A family request such as ``nodejs18`` is resolved in two steps: first the
set of currently supported lines is fetched, then the latest release within
the requested line only. ``line=None`` selects the latest release overall.
"""

import datetime
import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional

from relscout.common.http_client import Fetcher
from relscout.common.logging_utils import extra_context, is_debug_enabled
from relscout.errors import NoCandidateError
from ..compare import natural_sorted
from .base import DOTTED_VERSION, ExtractionStrategy
from .mirror import DirectoryListingStrategy

logger = logging.getLogger(__name__)


def _parse_date(value) -> Optional[datetime.date]:
    if not isinstance(value, str):
        return None
    try:
        return datetime.date.fromisoformat(value[:10])
    except ValueError:
        return None


class ReleaseFamily(ABC):
    """A product released as several concurrently supported lines."""

    #: Bare package name, e.g. ``nodejs``.
    name: str = ""
    #: Regex of the line selector following the bare name, e.g. ``\d+``.
    selector: str = r"\d+"

    def __init__(self, today: Optional[datetime.date] = None):
        self._today = today
        self._pattern = re.compile(f"{re.escape(self.name)}({self.selector})")

    @property
    def today(self) -> datetime.date:
        return self._today or datetime.date.today()

    def parse(self, package: str) -> Optional[str]:
        """Return the line selector of a member name, or None."""
        match = self._pattern.fullmatch(package)
        return match.group(1) if match else None

    def matches(self, package: str) -> bool:
        """True for the bare name and every syntactically valid member."""
        return package == self.name or self.parse(package) is not None

    def member_name(self, line: str) -> str:
        """Package name of one release line."""
        return f"{self.name}{line}"

    @abstractmethod
    def supported_lines(self, fetcher: Fetcher) -> List[str]:
        """Fetch the currently supported line selectors."""

    @abstractmethod
    def line_strategy(self, line: Optional[str]) -> ExtractionStrategy:
        """Strategy resolving the latest release of ``line`` (None: all lines)."""

    def latest(self, fetcher: Fetcher) -> str:
        """Latest release across the family, backing the bare name."""
        return self.line_strategy(None).resolve(fetcher)

    def resolve(self, package: str, fetcher: Fetcher) -> str:
        """Resolve a bare family name or a member name."""
        if package == self.name:
            return self.latest(fetcher)

        line = self.parse(package)
        if line is None:
            raise NoCandidateError(package, f"not a member of the {self.name} family")

        lines = self.supported_lines(fetcher)
        if is_debug_enabled(logger):
            logger.debug(
                "Supported release lines",
                extra=extra_context(
                    event="family_lines",
                    component="family",
                    action="supported_lines",
                    target=self.name,
                    lines=",".join(lines),
                ),
            )
        if line not in lines:
            raise NoCandidateError(package, f"release line {line} is not supported")
        return self.line_strategy(line).resolve(fetcher)


class NodeDistIndexStrategy(ExtractionStrategy):
    """Latest Node.js release from the dist index, optionally within one major."""

    INDEX_URL = "https://nodejs.org/dist/index.json"

    def __init__(self, major: Optional[str] = None):
        super().__init__()
        self.major = major

    @property
    def source(self) -> str:
        return self.INDEX_URL

    def fetch_candidates(self, fetcher: Fetcher) -> List[str]:
        data = fetcher.fetch_json(self.INDEX_URL)
        if not isinstance(data, list):
            raise NoCandidateError(self.source, "dist index is not a list")
        candidates = []
        for item in data:
            version = item.get("version") if isinstance(item, dict) else None
            if not isinstance(version, str) or not version.startswith("v"):
                continue
            version = version[1:]
            if self.major is not None and version.split(".", 1)[0] != self.major:
                continue
            candidates.append(version)
        return candidates


class NodeJsFamily(ReleaseFamily):
    """Node.js major lines (``nodejs18``, ``nodejs20`` ...)."""

    name = "nodejs"
    selector = r"\d+"
    SCHEDULE_URL = "https://raw.githubusercontent.com/nodejs/Release/main/schedule.json"

    def supported_lines(self, fetcher: Fetcher) -> List[str]:
        schedule = fetcher.fetch_json(self.SCHEDULE_URL)
        if not isinstance(schedule, dict):
            raise NoCandidateError(self.SCHEDULE_URL, "schedule is not an object")
        today = self.today
        lines = []
        for key, info in schedule.items():
            match = re.fullmatch(r"v(\d+)", key)
            if not match or not isinstance(info, dict):
                continue
            start, end = _parse_date(info.get("start")), _parse_date(info.get("end"))
            if start is None or end is None:
                continue
            if start <= today < end:
                lines.append(match.group(1))
        return natural_sorted(lines)

    def line_strategy(self, line: Optional[str]) -> ExtractionStrategy:
        return NodeDistIndexStrategy(line)


class PythonFamily(ReleaseFamily):
    """CPython minor lines (``python3.12``, ``python3.13`` ...)."""

    name = "python"
    selector = r"3\.\d+"
    CYCLES_URL = "https://endoflife.date/api/python.json"
    FTP_URL = "https://www.python.org/ftp/python/"

    def supported_lines(self, fetcher: Fetcher) -> List[str]:
        cycles = fetcher.fetch_json(self.CYCLES_URL)
        if not isinstance(cycles, list):
            raise NoCandidateError(self.CYCLES_URL, "cycle list is not a list")
        today = self.today
        lines = []
        for cycle in cycles:
            if not isinstance(cycle, dict):
                continue
            line = str(cycle.get("cycle", ""))
            if not re.fullmatch(self.selector, line):
                continue
            eol = cycle.get("eol")
            if eol is False:
                lines.append(line)
                continue
            eol_date = _parse_date(eol)
            if eol_date is not None and eol_date > today:
                lines.append(line)
        return natural_sorted(lines)

    def _listing(self, version_regex: str) -> ExtractionStrategy:
        return DirectoryListingStrategy(self.FTP_URL, prefix='href="', suffix='/"', version_regex=version_regex)

    def line_strategy(self, line: Optional[str]) -> ExtractionStrategy:
        return self._listing(DOTTED_VERSION if line is None else re.escape(line) + r"\.\d+")

    def latest(self, fetcher: Fetcher) -> str:
        """Latest release of any supported line.

        The FTP tree gets a ``3.N.0/`` directory with the first alpha, so the
        listing is restricted to lines that have shipped.
        """
        lines = self.supported_lines(fetcher)
        if not lines:
            raise NoCandidateError(self.CYCLES_URL, "no supported release lines")
        alternatives = "|".join(re.escape(line) for line in lines)
        return self._listing(f"(?:{alternatives})\\.\\d+").resolve(fetcher)
