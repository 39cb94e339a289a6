"""Tests for command line argument parsing."""

import pytest

from relscout.args import parse_args


class TestParseArgs:
    """Flag parsing and usage errors."""

    def test_packages(self):
        """Positional names parse with plain output and concurrent mode."""
        args = parse_args(["jq", "nodejs20"])
        assert args.PACKAGES == ["jq", "nodejs20"]
        assert args.OUTPUT_FORMAT == "plain"
        assert not args.SERIAL

    def test_all_with_options(self):
        """Every option is carried onto its uppercase destination."""
        args = parse_args(["--all", "-f", "JSON", "-o", "out.json", "-s", "-j", "4", "--timeout", "10"])
        assert args.ALL
        assert args.OUTPUT_FORMAT == "json"
        assert args.OUTPUT == "out.json"
        assert args.SERIAL
        assert args.JOBS == 4
        assert args.TIMEOUT == 10

    def test_cache_options(self):
        """Cache flags parse into directory, TTL and clear request."""
        args = parse_args(["--list", "--cache-dir", "/tmp/c", "--cache-ttl", "60", "--clear-cache"])
        assert args.CACHE_DIR == "/tmp/c"
        assert args.CACHE_TTL == 60
        assert args.CLEAR_CACHE

    def test_loglevel_is_uppercased(self):
        """Log levels are normalised to upper case."""
        assert parse_args(["-l", "--loglevel", "debug"]).LOG_LEVEL == "DEBUG"

    def test_clear_cache_alone_is_valid(self):
        """--clear-cache needs no other action."""
        assert parse_args(["--clear-cache"]).CLEAR_CACHE

    def test_nothing_requested(self):
        """No action at all is a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            parse_args([])
        assert excinfo.value.code == 2

    def test_exclusive_actions(self):
        """--all and --list cannot be combined."""
        with pytest.raises(SystemExit):
            parse_args(["--all", "--list"])

    def test_packages_with_all(self):
        """Package names cannot be combined with --all."""
        with pytest.raises(SystemExit):
            parse_args(["--all", "jq"])

    def test_unknown_format(self):
        """Unsupported output formats are rejected."""
        with pytest.raises(SystemExit):
            parse_args(["jq", "-f", "html"])

    @pytest.mark.parametrize("flag", ["-j", "--timeout", "--cache-ttl"])
    def test_positive_integers(self, flag):
        """Numeric options must be positive."""
        with pytest.raises(SystemExit):
            parse_args(["jq", flag, "0"])
