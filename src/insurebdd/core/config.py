from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
import tomllib

logger = logging.getLogger(__name__)

VALID_BROWSERS = ("chromium", "firefox", "webkit", "chrome")
MIN_VIEWPORT = (320, 240)
DEFAULT_BASE_URL = "http://localhost:3000"

_CONFIG_CACHE: dict | None = None


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int

    def as_dict(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class BrowserConfig:
    browser: str
    headless: bool
    viewport: Viewport
    timeout: int
    slow_mo: int
    record_video: bool
    record_trace: bool
    locale: str


@dataclass(frozen=True)
class RunConfig:
    base_url: str
    timeout: int
    retries: int
    parallel: int
    tags: str


@dataclass(frozen=True)
class UserCredentials:
    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None


@dataclass(frozen=True)
class ReportConfig:
    output_dir: str
    formats: list[str]
    include_screenshots: bool
    include_videos: bool
    include_traces: bool


_USER_DEFAULTS: dict[str, dict[str, str | None]] = {
    "default": {
        "email": "test@example.com",
        "password": "password123",
        "first_name": "Test",
        "last_name": "User",
        "role": None,
    },
    "admin": {
        "email": "admin@example.com",
        "password": "admin123",
        "first_name": "Admin",
        "last_name": "User",
        "role": "administrator",
    },
    "agent": {
        "email": "agent@example.com",
        "password": "agent123",
        "first_name": "Insurance",
        "last_name": "Agent",
        "role": "agent",
    },
}


# ---- config file ----
def config_path() -> Path:
    override = os.environ.get("INSUREBDD_CONFIG_PATH")
    if override:
        return Path(override).expanduser()
    return Path.cwd() / "insurebdd.toml"


def load_config() -> dict:
    path = config_path()
    if not path.exists():
        return {}
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ValueError(f"Invalid config file: {path}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config file structure: {path}")
    return data


def get_config() -> dict:
    global _CONFIG_CACHE
    if _CONFIG_CACHE is None:
        _CONFIG_CACHE = load_config()
    return _CONFIG_CACHE


def reset_config_cache() -> None:
    global _CONFIG_CACHE
    _CONFIG_CACHE = None


def get_config_value(*keys: str, default: object | None = None) -> object | None:
    current: object = get_config()
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


# ---- env helpers ----
def get_env_var(key: str, fallback: str = "") -> str:
    return os.environ.get(key) or fallback


def get_env_bool(key: str, fallback: bool = False) -> bool:
    value = os.environ.get(key)
    if value is None:
        return fallback
    return value.lower() == "true"


def get_env_number(key: str, fallback: int = 0) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value, 10)
    except ValueError:
        return fallback


def _setting(env_key: str, section: str, key: str, default: object) -> object:
    """Resolve one setting: env var, then config file, then default."""
    raw = os.environ.get(env_key)
    if raw:
        return raw
    value = get_config_value(section, key)
    if value is not None:
        return value
    return default


def _as_int(value: object, fallback: int) -> int:
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    try:
        return int(str(value), 10)
    except ValueError:
        return fallback


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() == "true"


# ---- typed records ----
def get_browser_config() -> BrowserConfig:
    headless_raw = _setting("HEADLESS", "browser", "headless", True)
    return BrowserConfig(
        browser=str(_setting("BROWSER", "browser", "name", "chromium")),
        # anything but an explicit "false" keeps the browser headless
        headless=headless_raw is not False and str(headless_raw).lower() != "false",
        viewport=Viewport(
            width=_as_int(_setting("VIEWPORT_WIDTH", "browser", "viewport_width", 1920), 1920),
            height=_as_int(_setting("VIEWPORT_HEIGHT", "browser", "viewport_height", 1080), 1080),
        ),
        timeout=_as_int(_setting("TIMEOUT", "browser", "timeout", 60000), 60000),
        slow_mo=_as_int(_setting("SLOW_MO", "browser", "slow_mo", 0), 0),
        record_video=_as_bool(_setting("RECORD_VIDEO", "browser", "record_video", False)),
        record_trace=_as_bool(_setting("RECORD_TRACE", "browser", "record_trace", False)),
        locale=str(_setting("LOCALE", "browser", "locale", "en-GB")),
    )


def _base_url() -> str:
    explicit = os.environ.get("BASE_URL")
    if explicit:
        return explicit
    per_env = os.environ.get(f"{environment().upper()}_BASE_URL")
    if per_env:
        return per_env
    value = get_config_value("run", "base_url")
    return str(value) if value else DEFAULT_BASE_URL


def get_run_config() -> RunConfig:
    return RunConfig(
        base_url=_base_url(),
        timeout=_as_int(_setting("TIMEOUT", "run", "timeout", 60000), 60000),
        retries=_as_int(_setting("RETRIES", "run", "retries", 0), 0),
        parallel=_as_int(_setting("PARALLEL", "run", "parallel", 1), 1),
        tags=str(_setting("TAGS", "run", "tags", "")),
    )


def get_user_credentials(role: str = "default") -> UserCredentials:
    key = role if role in _USER_DEFAULTS else "default"
    defaults = _USER_DEFAULTS[key]
    prefix = key.upper()
    return UserCredentials(
        email=get_env_var(f"{prefix}_USER_EMAIL", str(defaults["email"])),
        password=get_env_var(f"{prefix}_USER_PASSWORD", str(defaults["password"])),
        first_name=get_env_var(f"{prefix}_USER_FIRST_NAME", str(defaults["first_name"])),
        last_name=get_env_var(f"{prefix}_USER_LAST_NAME", str(defaults["last_name"])),
        role=defaults["role"],
    )


def get_report_config() -> ReportConfig:
    formats = str(_setting("REPORT_FORMATS", "reports", "formats", "json,html"))
    return ReportConfig(
        output_dir=str(_setting("REPORTS_DIR", "reports", "output_dir", "reports")),
        formats=[f.strip() for f in formats.split(",") if f.strip()],
        include_screenshots=str(_setting("INCLUDE_SCREENSHOTS", "reports", "include_screenshots", True)).lower()
        != "false",
        include_videos=_as_bool(_setting("INCLUDE_VIDEOS", "reports", "include_videos", False)),
        include_traces=_as_bool(_setting("INCLUDE_TRACES", "reports", "include_traces", False)),
    )


def environment() -> str:
    return get_env_var("TEST_ENV", "qa")


def is_debug_mode() -> bool:
    return os.environ.get("DEBUG") == "true"


def is_ci_mode() -> bool:
    return os.environ.get("CI") == "true"


def validate_config() -> None:
    browser_config = get_browser_config()
    if browser_config.browser not in VALID_BROWSERS:
        raise ConfigError(
            f"Invalid browser: {browser_config.browser}. Valid options: {', '.join(VALID_BROWSERS)}"
        )

    run_config = get_run_config()
    if not run_config.base_url.startswith("http"):
        raise ConfigError(f"Invalid BASE_URL: {run_config.base_url}. Must start with http:// or https://")

    if browser_config.timeout < 1000:
        logger.warning("Timeout is less than 1 second, this might cause issues")

    min_width, min_height = MIN_VIEWPORT
    if browser_config.viewport.width < min_width or browser_config.viewport.height < min_height:
        raise ConfigError(f"Viewport dimensions are too small. Minimum {min_width}x{min_height} required")
