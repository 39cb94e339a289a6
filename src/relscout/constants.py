"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    USAGE_ERROR = 2
    UNKNOWN_PACKAGE = 3
    MISSING_TOOL = 4


class OutputFormats(Enum):
    """Output formats supported by the program.

    Args:
        Enum (string): Output formats supported by the program.
    """

    PLAIN = "plain"
    CSV = "csv"
    JSON = "json"
    TOML = "toml"
    XML = "xml"
    YAML = "yaml"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_FORMATS = [fmt.value for fmt in OutputFormats]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

    # Network
    REQUEST_TIMEOUT = 30  # Timeout in seconds for every HTTP request and git call
    USER_AGENT = (
        "Mozilla/5.0 (X11; Linux x86_64; rv:128.0) Gecko/20100101 Firefox/128.0"
    )
    GITHUB_API_BASE = "https://api.github.com"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    ENV_GITLAB_TOKEN = "GITLAB_TOKEN"
    TAGS_PER_PAGE = 100

    # Cache
    CACHE_TTL_SEC = 3600
    CACHE_DIR = None  # resolved lazily; see common.cache.default_cache_dir
    CACHE_DIR_NAME = "relscout"
    CACHE_MAX_NAME_LEN = 200

    # Concurrency
    MAX_WORKERS = 16

    # Environment and configuration
    ENV_CACHE_DIR = "RELSCOUT_CACHE_DIR"
    ENV_CONFIG = "RELSCOUT_CONFIG"
    ENV_LOG_LEVEL = "RELSCOUT_LOG_LEVEL"
    CONFIG_FILE_NAME = "relscout.yml"
    CONFIG_KEYS = ["cache_dir", "cache_ttl", "request_timeout", "max_workers", "user_agent"]
