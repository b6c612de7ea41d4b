from unittest.mock import MagicMock, patch

import requests

from compass.ai import advisor_client
from compass.ai.advisor_client import Fallbacks, check_advisor_online, extract_text, generate_advice

FALLBACKS = Fallbacks(missing_key="key missing", error="error", empty="empty")


def _response(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_extract_text():
    assert extract_text(_response("  - Fewer images\n")) == "- Fewer images"
    assert extract_text({"choices": [{"text": "plain"}]}) == "plain"
    assert extract_text({"choices": []}) == ""
    assert extract_text(_response(None)) == ""


def test_missing_key_never_calls_out():
    with patch.object(advisor_client, "ADVISOR_API_KEY", None), patch.object(advisor_client, "_get_client") as client:
        result = generate_advice("prompt", FALLBACKS)
    assert result.available is False
    assert result.reason == "missing_key"
    assert result.text == "key missing"
    client.assert_not_called()


def test_success():
    fake = MagicMock()
    fake.chat.completions.create.return_value.model_dump.return_value = _response("Offer a studio session.")
    with patch.object(advisor_client, "ADVISOR_API_KEY", "k"), patch.object(advisor_client, "_get_client", return_value=fake):
        result = generate_advice("prompt", FALLBACKS)
    assert result.available is True
    assert result.text == "Offer a studio session."
    kwargs = fake.chat.completions.create.call_args.kwargs
    assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]
    assert kwargs["model"] == advisor_client.ADVISOR_MODEL


def test_errors_degrade_to_fallback():
    fake = MagicMock()
    fake.chat.completions.create.side_effect = ConnectionError("boom")
    with patch.object(advisor_client, "ADVISOR_API_KEY", "k"), patch.object(advisor_client, "_get_client", return_value=fake):
        result = generate_advice("prompt", FALLBACKS)
    assert (result.available, result.reason, result.text) == (False, "error", "error")


def test_empty_text_degrades_to_fallback():
    fake = MagicMock()
    fake.chat.completions.create.return_value.model_dump.return_value = _response("   ")
    with patch.object(advisor_client, "ADVISOR_API_KEY", "k"), patch.object(advisor_client, "_get_client", return_value=fake):
        result = generate_advice("prompt", FALLBACKS)
    assert (result.available, result.reason, result.text) == (False, "empty", "empty")


def test_base_url_strips_completions_path():
    with patch.object(advisor_client, "ADVISOR_BASE_URL", "https://example.test/v1/chat/completions?x=1"):
        assert advisor_client._base_url() == "https://example.test/v1"


def test_check_advisor_online():
    ok = MagicMock(status_code=401)
    with patch.object(advisor_client.requests, "get", return_value=ok):
        assert check_advisor_online() is True
    with patch.object(advisor_client.requests, "get", side_effect=requests.ConnectionError()):
        assert check_advisor_online() is False
