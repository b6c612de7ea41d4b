import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlparse, urlunparse

import requests
from openai import OpenAI

logger = logging.getLogger(__name__)

ADVISOR_BASE_URL = os.getenv("ADVISOR_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai")
ADVISOR_MODEL = os.getenv("ADVISOR_MODEL", "gemini-2.5-flash")
ADVISOR_TIMEOUT = float(os.getenv("ADVISOR_TIMEOUT", "25"))
ADVISOR_HEALTH_TIMEOUT = float(os.getenv("ADVISOR_HEALTH_TIMEOUT", "1.0"))
ADVISOR_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or os.getenv("OPENAI_API_KEY")
ADVISOR_DEFAULT_MAX_TOKENS = int(os.getenv("ADVISOR_MAX_TOKENS", "800"))


class MissingAPIKey(RuntimeError):
    pass


@dataclass(frozen=True)
class Fallbacks:
    missing_key: str
    error: str
    empty: str


@dataclass(frozen=True)
class AdvisoryResult:
    """success(text) or unavailable(reason); `text` always holds something displayable."""

    text: str
    available: bool
    reason: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "AdvisoryResult":
        return cls(text=text, available=True)

    @classmethod
    def unavailable(cls, reason: str, text: str) -> "AdvisoryResult":
        return cls(text=text, available=False, reason=reason)


def _base_url() -> str:
    parsed = urlparse(ADVISOR_BASE_URL)
    path = parsed.path.rstrip("/")
    if path.endswith("/chat/completions"):
        path = path[: -len("/chat/completions")]
    elif path.endswith("/completions"):
        path = path[: -len("/completions")]
    base = parsed._replace(path=path, params="", query="", fragment="")
    return urlunparse(base)


def _get_client() -> OpenAI:
    # No retries: the advisory text is decorative and a failure falls back to a fixed message.
    return OpenAI(base_url=_base_url(), api_key=ADVISOR_API_KEY, max_retries=0)


def check_advisor_online(timeout: float | None = None) -> bool:
    base = _base_url().rstrip("/")
    health_timeout = timeout if timeout is not None else ADVISOR_HEALTH_TIMEOUT
    headers = {"Authorization": f"Bearer {ADVISOR_API_KEY}"} if ADVISOR_API_KEY else {}
    for path in ("/models", "/health"):
        try:
            resp = requests.get(f"{base}{path}", timeout=health_timeout, headers=headers)
        except requests.RequestException:
            continue
        # Any non-5xx HTTP response means the endpoint is reachable.
        if resp.status_code < 500:
            return True
    return False


def query_advisor(
    prompt: str,
    max_tokens: int | None = None,
    temperature: float | None = None,
) -> Dict[str, Any]:
    if not ADVISOR_API_KEY:
        raise MissingAPIKey("Missing GEMINI_API_KEY. Set the environment variable and restart the app.")

    token_limit = int(max_tokens) if max_tokens is not None else ADVISOR_DEFAULT_MAX_TOKENS
    response = _get_client().chat.completions.create(
        model=ADVISOR_MODEL,
        messages=[{"role": "user", "content": prompt}],
        temperature=0.7 if temperature is None else float(temperature),
        max_tokens=token_limit,
        timeout=ADVISOR_TIMEOUT,
    )
    try:
        return response.model_dump()
    except AttributeError:
        return response  # type: ignore[return-value]


def extract_text(response: Dict[str, Any]) -> str:
    choices = response.get("choices") or []
    if not choices:
        return ""
    choice = choices[0]
    message = choice.get("message") if isinstance(choice, dict) else None
    if isinstance(message, dict):
        content = message.get("content")
        if isinstance(content, str) and content.strip():
            return content.strip()
        return ""
    text = choice.get("text") if isinstance(choice, dict) else None
    if text:
        return str(text).strip()
    return ""


def generate_advice(prompt: str, fallbacks: Fallbacks) -> AdvisoryResult:
    try:
        text = extract_text(query_advisor(prompt))
    except MissingAPIKey:
        return AdvisoryResult.unavailable("missing_key", fallbacks.missing_key)
    except Exception:
        logger.exception("Advisor request failed")
        return AdvisoryResult.unavailable("error", fallbacks.error)
    if not text:
        return AdvisoryResult.unavailable("empty", fallbacks.empty)
    return AdvisoryResult.success(text)
