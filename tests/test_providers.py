import json

import httpx
import pytest

from translate_dir.ai.exceptions import ProviderError, ProviderErrorKind
from translate_dir.ai.service import (
    AIService,
    ProviderCredentials,
    require_credentials,
    resolve_credentials,
    strip_code_fence,
)
from translate_dir.config import DEFAULT_CONFIG
from translate_dir.language_codes import Language


def make_service(handler, provider="gemini", api_url=None, models=None):
    credentials = ProviderCredentials(
        provider=provider,
        api_key="secret",
        models=models or (["gemini-2.5-flash"] if provider == "gemini" else ["gpt-4o-mini"]),
        api_url=api_url,
    )
    return AIService(credentials, config=DEFAULT_CONFIG, transport=httpx.MockTransport(handler))


def gemini_reply(text):
    return httpx.Response(200, json={
        "candidates": [{"content": {"parts": [{"text": text}]}}],
        "usageMetadata": {"promptTokenCount": 12, "candidatesTokenCount": 5},
    })


def test_gemini_request_and_response():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return gemini_reply("Bonjour")

    service = make_service(handler)
    result = service.translate("Hello", Language.ENGLISH, Language.FRENCH)

    assert result == "Bonjour"
    assert seen["url"].endswith("/gemini-2.5-flash:generateContent")
    assert seen["key"] == "secret"
    prompt = seen["body"]["contents"][0]["parts"][0]["text"]
    assert "English (en)" in prompt and "French (fr)" in prompt
    assert "Hello" in prompt
    assert service.get_total_token_usage() == {"prompt_tokens": 12, "completion_tokens": 5}


def test_openai_compatible_request_and_response():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "choices": [{"message": {"content": "Hallo"}}],
            "usage": {"prompt_tokens": 3, "completion_tokens": 1},
        })

    service = make_service(handler, provider="openai", api_url="https://llm.test/v1/chat/completions")
    result = service.translate("Hello", Language.ENGLISH, Language.GERMAN)

    assert result == "Hallo"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"]["model"] == "gpt-4o-mini"
    assert seen["body"]["messages"][0]["role"] == "system"


@pytest.mark.parametrize("status,kind", [
    (429, ProviderErrorKind.TRANSIENT),
    (503, ProviderErrorKind.TRANSIENT),
    (400, ProviderErrorKind.PERMANENT),
    (401, ProviderErrorKind.PERMANENT),
])
def test_http_errors_are_classified(status, kind):
    def handler(request):
        return httpx.Response(status, json={"error": {"message": "nope"}})

    with pytest.raises(ProviderError) as excinfo:
        make_service(handler).translate("Hello", Language.ENGLISH, Language.FRENCH)
    assert excinfo.value.kind is kind
    assert "nope" in str(excinfo.value)
    assert excinfo.value.details["status_code"] == status


def test_timeout_is_transient():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ProviderError) as excinfo:
        make_service(handler).translate("Hello", Language.ENGLISH, Language.FRENCH)
    assert excinfo.value.transient


def test_connection_error_is_transient():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ProviderError) as excinfo:
        make_service(handler).translate("Hello", Language.ENGLISH, Language.FRENCH)
    assert excinfo.value.kind is ProviderErrorKind.TRANSIENT


def test_unexpected_body_is_permanent():
    def handler(request):
        return httpx.Response(200, json={"candidates": []})

    with pytest.raises(ProviderError) as excinfo:
        make_service(handler).translate("Hello", Language.ENGLISH, Language.FRENCH)
    assert excinfo.value.kind is ProviderErrorKind.PERMANENT


def test_whitespace_content_is_not_sent():
    def handler(request):
        raise AssertionError("provider should not be called")

    assert make_service(handler).translate("  \n", Language.ENGLISH, Language.FRENCH) == "  \n"


def test_code_fence_is_stripped_unless_document_is_fenced():
    def handler(request):
        return gemini_reply("```markdown\n# Titre\n```")

    service = make_service(handler)
    assert service.translate("# Title", Language.ENGLISH, Language.FRENCH) == "# Titre"
    assert service.translate("```\ncode\n```", Language.ENGLISH, Language.FRENCH) == "```markdown\n# Titre\n```"


def test_strip_code_fence_leaves_plain_text():
    assert strip_code_fence("plain") == "plain"


def test_missing_key_raises_auth_missing_without_request():
    def handler(request):
        raise AssertionError("no request expected")

    credentials = ProviderCredentials(provider="gemini", api_key=None)
    service = AIService(credentials, config=DEFAULT_CONFIG, transport=httpx.MockTransport(handler))
    with pytest.raises(ProviderError) as excinfo:
        service.translate("Hello", Language.ENGLISH, Language.FRENCH)
    assert excinfo.value.kind is ProviderErrorKind.AUTH_MISSING


def test_resolve_credentials_uses_environment_for_gemini():
    credentials = resolve_credentials(DEFAULT_CONFIG, environ={"GOOGLE_API_KEY": "from-env"})
    assert credentials.provider == "gemini"
    assert credentials.api_key == "from-env"
    assert credentials.is_configured
    assert "from-env" not in repr(credentials)


def test_configured_key_wins_over_environment():
    config = {"ai_provider": "gemini", "gemini": {"api_key": "from-config"}}
    credentials = resolve_credentials(config, environ={"GOOGLE_API_KEY": "from-env"})
    assert credentials.api_key == "from-config"


def test_placeholder_key_is_not_configured():
    credentials = resolve_credentials(DEFAULT_CONFIG, environ={})
    assert not credentials.is_configured
    with pytest.raises(ProviderError) as excinfo:
        require_credentials(credentials)
    assert excinfo.value.code == "auth_missing"


def test_provider_override_and_legacy_model_field():
    config = {"deepseek": {"api_key": "k", "model": "deepseek-chat", "api_url": "https://ds.test"}}
    credentials = resolve_credentials(config, environ={}, provider_override="deepseek")
    assert credentials.provider == "deepseek"
    assert credentials.models == ["deepseek-chat"]
    assert credentials.api_url == "https://ds.test"


def test_first_configured_model_is_used():
    service = AIService(ProviderCredentials(provider="openai", api_key="k", models=["m1", "m2"]),
                        config=DEFAULT_CONFIG)
    assert service.get_model("fallback") == "m1"
    bare = AIService(ProviderCredentials(provider="openai", api_key="k"), config=DEFAULT_CONFIG)
    assert bare.get_model("fallback") == "fallback"
