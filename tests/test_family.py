"""Tests for release families (Node.js, Python)."""

import datetime

import pytest

from relscout.errors import FetchError, NoCandidateError
from relscout.versioning.strategies import NodeDistIndexStrategy, NodeJsFamily, PythonFamily

TODAY = datetime.date(2024, 6, 1)

NODE_SCHEDULE = {
    "v16": {"start": "2021-04-20", "end": "2023-09-11"},
    "v18": {"start": "2022-04-19", "end": "2025-04-30"},
    "v20": {"start": "2023-04-18", "end": "2026-04-30"},
    "v22": {"start": "2024-04-24", "end": "2027-04-30"},
    "v24": {"start": "2025-04-22", "end": "2028-04-30"},
    "v0.12": {"start": "2015-02-06", "end": "2016-12-31"},
}

NODE_INDEX = [
    {"version": "v22.2.0"},
    {"version": "v20.14.0"},
    {"version": "v20.9.0"},
    {"version": "v18.20.3"},
    {"version": "v18.9.1"},
    {"version": "v16.20.2"},
]

PYTHON_CYCLES = [
    {"cycle": "3.13", "eol": "2029-10-31"},
    {"cycle": "3.12", "eol": "2028-10-31"},
    {"cycle": "3.8", "eol": "2024-10-07"},
    {"cycle": "3.7", "eol": "2023-06-27"},
    {"cycle": "2.7", "eol": "2020-01-01"},
]


def _ftp_listing(*versions):
    return "\n".join(f'<a href="{v}/">{v}/</a>' for v in versions)


PYTHON_FTP = _ftp_listing("2.7.18", "3.7.17", "3.8.9", "3.8.19", "3.12.3", "3.12.10", "3.13.0")


@pytest.fixture
def node_fetcher(fake_fetcher):
    return fake_fetcher({
        NodeJsFamily.SCHEDULE_URL: NODE_SCHEDULE,
        NodeDistIndexStrategy.INDEX_URL: NODE_INDEX,
    })


@pytest.fixture
def python_fetcher(fake_fetcher):
    return fake_fetcher({
        PythonFamily.CYCLES_URL: PYTHON_CYCLES,
        PythonFamily.FTP_URL: PYTHON_FTP,
    })


class TestNodeJsFamily:
    """Node.js major lines."""

    def test_matches(self):
        """Bare and numbered nodejs names match; other spellings do not."""
        family = NodeJsFamily(today=TODAY)
        assert family.matches("nodejs")
        assert family.matches("nodejs18")
        assert not family.matches("nodejs-lts")
        assert not family.matches("node18")

    def test_supported_lines_follow_schedule(self, node_fetcher):
        """Only lines between their start and end dates are supported."""
        assert NodeJsFamily(today=TODAY).supported_lines(node_fetcher) == ["18", "20", "22"]

    def test_member_fetches_schedule_then_index(self, node_fetcher):
        """A numbered member checks the schedule before the release index."""
        assert NodeJsFamily(today=TODAY).resolve("nodejs18", node_fetcher) == "18.20.3"
        assert node_fetcher.calls == [NodeJsFamily.SCHEDULE_URL, NodeDistIndexStrategy.INDEX_URL]

    def test_unsupported_line_skips_index(self, node_fetcher):
        """An end-of-life line is absent without fetching the index."""
        with pytest.raises(NoCandidateError):
            NodeJsFamily(today=TODAY).resolve("nodejs16", node_fetcher)
        assert node_fetcher.calls == [NodeJsFamily.SCHEDULE_URL]

    def test_bare_name_is_latest_overall(self, node_fetcher):
        """The bare name resolves to the newest release of any line."""
        assert NodeJsFamily(today=TODAY).resolve("nodejs", node_fetcher) == "22.2.0"
        assert node_fetcher.calls == [NodeDistIndexStrategy.INDEX_URL]

    def test_schedule_failure_propagates(self, fake_fetcher):
        """A failed schedule fetch reaches the caller."""
        with pytest.raises(FetchError):
            NodeJsFamily(today=TODAY).resolve("nodejs20", fake_fetcher())

    def test_line_without_releases(self, fake_fetcher):
        """A supported line with nothing in the index has no candidate."""
        fetcher = fake_fetcher({
            NodeJsFamily.SCHEDULE_URL: NODE_SCHEDULE,
            NodeDistIndexStrategy.INDEX_URL: [{"version": "v20.1.0"}],
        })
        with pytest.raises(NoCandidateError):
            NodeJsFamily(today=TODAY).resolve("nodejs22", fetcher)


class TestPythonFamily:
    """CPython minor lines."""

    def test_matches(self):
        """python and python3.N match; Python 2 and bare python3 do not."""
        family = PythonFamily(today=TODAY)
        assert family.matches("python")
        assert family.matches("python3.12")
        assert not family.matches("python2.7")
        assert not family.matches("python3")

    def test_supported_lines(self, python_fetcher):
        """Python 3 cycles before their end-of-life date are supported."""
        assert PythonFamily(today=TODAY).supported_lines(python_fetcher) == ["3.8", "3.12", "3.13"]

    def test_eol_false_is_supported(self, fake_fetcher):
        """A cycle without an end-of-life date is supported."""
        fetcher = fake_fetcher({PythonFamily.CYCLES_URL: [{"cycle": "3.14", "eol": False}]})
        assert PythonFamily(today=TODAY).supported_lines(fetcher) == ["3.14"]

    def test_member_resolves_within_line(self, python_fetcher):
        """A numbered member picks the newest patch release of its line."""
        family = PythonFamily(today=TODAY)
        assert family.resolve("python3.12", python_fetcher) == "3.12.10"
        assert family.resolve("python3.8", python_fetcher) == "3.8.19"

    def test_eol_line_is_absent(self, python_fetcher):
        """An end-of-life line is absent without reading the FTP listing."""
        with pytest.raises(NoCandidateError):
            PythonFamily(today=TODAY).resolve("python3.7", python_fetcher)
        assert PythonFamily.FTP_URL not in python_fetcher.calls

    def test_bare_name(self, python_fetcher):
        """The bare name resolves to the newest supported release."""
        assert PythonFamily(today=TODAY).resolve("python", python_fetcher) == "3.13.0"

    def test_bare_name_ignores_unreleased_line(self, fake_fetcher):
        """A directory for a line still in alpha is not the latest release."""
        fetcher = fake_fetcher({
            PythonFamily.CYCLES_URL: [
                {"cycle": "3.14", "eol": "2030-10-31"},
                {"cycle": "3.13", "eol": "2029-10-31"},
            ],
            PythonFamily.FTP_URL: _ftp_listing("3.13.8", "3.14.0", "3.15.0"),
        })
        assert PythonFamily(today=datetime.date(2026, 10, 19)).resolve("python", fetcher) == "3.14.0"

    def test_bare_name_without_supported_lines(self, fake_fetcher):
        """No supported line at all leaves the bare name absent."""
        fetcher = fake_fetcher({
            PythonFamily.CYCLES_URL: [{"cycle": "3.7", "eol": "2023-06-27"}],
            PythonFamily.FTP_URL: _ftp_listing("3.7.17", "3.15.0"),
        })
        with pytest.raises(NoCandidateError):
            PythonFamily(today=TODAY).resolve("python", fetcher)

    def test_member_name(self):
        """Member names append the line to the family name."""
        assert PythonFamily().member_name("3.12") == "python3.12"
