from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from wordnik_errors import ConfigurationError

BASE_DIR = Path(__file__).resolve().parent
CONFIG_FILE = BASE_DIR / "wordnik_config.json"
DEFAULT_BASE_URL = "https://api.wordnik.com/v4"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class WordnikConfig:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT


def load_config_file() -> Dict[str, Any]:
    if not CONFIG_FILE.exists():
        return {}
    try:
        data = json.loads(CONFIG_FILE.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigurationError(f"{CONFIG_FILE.name} is not valid JSON.") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{CONFIG_FILE.name} must contain a JSON object.")
    return data


def require_api_key(api_key: Any) -> str:
    if not isinstance(api_key, str) or not api_key.strip():
        raise ConfigurationError("A valid Wordnik api_key is required.")
    return api_key.strip()


def parse_timeout(raw_timeout: Any) -> float:
    try:
        timeout = float(raw_timeout)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid timeout: {raw_timeout!r}") from exc
    if timeout <= 0:
        raise ConfigurationError(f"Timeout must be positive, got {timeout}")
    return timeout


def require_base_url(base_url: Any) -> str:
    text = str(base_url).strip().rstrip("/")
    parsed = urlparse(text)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(
            f"Invalid base_url {text!r}: expected an http or https url."
        )
    return text


def load_config(api_key: Optional[str] = None) -> WordnikConfig:
    file_config = load_config_file()

    if api_key is None:
        api_key = os.environ.get("WORDNIK_API_KEY") or file_config.get("api_key")
    base_url = (
        os.environ.get("WORDNIK_BASE_URL")
        or file_config.get("base_url")
        or DEFAULT_BASE_URL
    )
    raw_timeout = os.environ.get("WORDNIK_TIMEOUT") or file_config.get("timeout")
    timeout = DEFAULT_TIMEOUT if raw_timeout is None else parse_timeout(raw_timeout)

    return WordnikConfig(
        api_key=require_api_key(api_key),
        base_url=require_base_url(base_url),
        timeout=timeout,
    )
