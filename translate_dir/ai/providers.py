"""
AI Provider API Implementations

This module contains the API call implementations for each provider:
- Gemini
- OpenAI-compatible chat completions (OpenAI, DeepSeek, custom providers)

Each function takes an AIService instance and a prompt, returns the text response.
HTTP failures are mapped to ProviderError kinds:
- timeouts, connection errors, 408/429/5xx: transient
- any other HTTP error or an unexpected response body: permanent
"""

from typing import Any
import httpx

from translate_dir.logger import get_logger
from translate_dir.ai.exceptions import ProviderError, ProviderErrorKind

logger = get_logger(__name__)

TRANSIENT_STATUS_CODES = {408, 425, 429, 500, 502, 503, 504}


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (read timeout) or a dict with
            connect, write, read, pool keys

    Returns:
        httpx.Timeout object
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', 10.0),
            write=timeout_config.get('write', 60.0),
            read=timeout_config.get('read', 120.0),
            pool=timeout_config.get('pool', 10.0),
        )
    else:
        timeout_value = float(timeout_config) if timeout_config else 120.0
        return httpx.Timeout(
            connect=10.0,
            write=60.0,
            read=timeout_value,
            pool=10.0,
        )


def classify_status(status_code: int) -> ProviderErrorKind:
    if status_code in TRANSIENT_STATUS_CODES:
        return ProviderErrorKind.TRANSIENT
    return ProviderErrorKind.PERMANENT


def handle_http_error(e: httpx.HTTPStatusError, provider: str):
    """Raise a ProviderError with the provider's own error message when it sends one."""
    status_code = e.response.status_code
    error_text = "Unknown error"

    try:
        error_json = e.response.json()
        if isinstance(error_json, dict) and "error" in error_json:
            error_detail = error_json["error"]
            if isinstance(error_detail, dict):
                error_text = error_detail.get("message", str(error_detail))
            else:
                error_text = str(error_detail)
    except ValueError:
        error_text = e.response.text[:500] if e.response.text else "No details"

    kind = classify_status(status_code)
    logger.error(f"{provider} API HTTP error ({kind.value}): {status_code} - {error_text}")
    raise ProviderError(
        f"{provider} API error ({status_code}): {error_text}",
        kind=kind,
        details={"provider": provider, "status_code": status_code},
    )


def _post(service, provider: str, url: str, body: dict, headers: dict = None) -> dict:
    try:
        with service.http_client() as client:
            response = client.post(url, headers=headers, json=body)
            response.raise_for_status()
            return response.json()
    except httpx.HTTPStatusError as e:
        handle_http_error(e, provider)
    except httpx.TimeoutException:
        raise ProviderError(f"{provider} API request timeout", kind=ProviderErrorKind.TRANSIENT,
                            details={"provider": provider})
    except httpx.TransportError as e:
        raise ProviderError(f"{provider} API connection failed: {e}", kind=ProviderErrorKind.TRANSIENT,
                            details={"provider": provider})
    except ValueError as e:
        raise ProviderError(f"{provider} API returned invalid JSON: {e}",
                            details={"provider": provider})


def call_gemini_api(service, prompt: str) -> str:
    """Call Gemini API."""
    credentials = service.credentials
    model = service.get_model('gemini-2.5-flash')
    base_url = (credentials.api_url or 'https://generativelanguage.googleapis.com/v1beta/models').rstrip('/')

    url = f"{base_url}/{model}:generateContent"
    headers = {"x-goog-api-key": credentials.api_key}

    body = {
        "systemInstruction": {"parts": [{"text": service.system_message}]},
        "contents": [{
            "parts": [{
                "text": prompt
            }]
        }],
    }

    logger.debug(f"Calling Gemini API: {model}")
    result = _post(service, "Gemini", url, body, headers=headers)

    usage_metadata = result.get('usageMetadata', {})
    service.record_usage(
        usage_metadata.get('promptTokenCount', 0),
        usage_metadata.get('candidatesTokenCount', 0),
    )

    candidates = result.get('candidates') or []
    if candidates:
        content = candidates[0].get('content') or {}
        parts = content.get('parts') or []
        if parts:
            return ''.join(part.get('text', '') for part in parts)

    raise ProviderError(f"Unexpected Gemini API response format: {list(result.keys())}",
                        details={"provider": "Gemini"})


def call_openai_compatible_api(service, prompt: str) -> str:
    """
    Call an OpenAI-compatible chat completions endpoint (OpenAI, DeepSeek, custom).
    """
    credentials = service.credentials
    provider = service.provider_display_name
    model = service.get_model('')

    if not credentials.api_url:
        raise ProviderError(f"{provider} API URL not configured", details={"provider": provider})
    if not model:
        raise ProviderError(f"{provider} model not configured", details={"provider": provider})

    headers = {
        "Authorization": f"Bearer {credentials.api_key}",
        "Content-Type": "application/json"
    }

    body = {
        "model": model,
        "messages": [
            {"role": "system", "content": service.system_message},
            {"role": "user", "content": prompt},
        ],
    }

    logger.debug(f"  Calling {provider} API (model: {model})...")
    result = _post(service, provider, credentials.api_url, body, headers=headers)

    usage = result.get('usage', {})
    service.record_usage(usage.get('prompt_tokens', 0), usage.get('completion_tokens', 0))

    choices = result.get('choices') or []
    if choices:
        content = (choices[0].get('message') or {}).get('content')
        if content is not None:
            logger.debug(f"  Received {len(content)} chars from {provider}")
            return content

    raise ProviderError(f"No content in {provider} response", details={"provider": provider})
