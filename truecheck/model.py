# truecheck/model.py
import json
import requests
from typing import Any, Dict

from .config import settings
from .errors import NetworkError, ParseError, UpstreamError
from .log import get_logger
from .models import SimpleVerificationResult, VerificationResult

logger = get_logger(__name__)

VERACITIES = {"true", "false", "uncertain"}
STATUSES = {"valid", "invalid", "error"}

NO_JSON_MESSAGE = "Unable to parse AI response"
BAD_JSON_MESSAGE = "Failed to parse verification results"
DEFAULT_MESSAGE = "Verification completed"


def call_model(prompt: str, credential: str) -> str:
    """
    Send one generateContent request and return the first candidate's text.

    Raises UpstreamError on a non-2xx status and NetworkError on transport
    failure or timeout. A reply without text gives "".
    """
    # the caller's key travels in a header rather than the ?key= query param
    headers = {"Content-Type": "application/json", "x-goog-api-key": credential}
    body = {"contents": [{"parts": [{"text": prompt}]}]}
    try:
        resp = requests.post(settings.model_url, json=body, headers=headers,
                             timeout=settings.REQUEST_TIMEOUT)
    except requests.RequestException as e:
        logger.warning(f"Model API call failed: {e.__class__.__name__}")
        raise NetworkError(str(e)) from e

    if not resp.ok:
        logger.warning(f"Model API error: {resp.status_code}")
        raise UpstreamError(resp.status_code)

    try:
        payload = resp.json()
    except ValueError as e:
        raise UpstreamError(resp.status_code) from e

    try:
        text = payload["candidates"][0]["content"]["parts"][0].get("text")
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""
    return text if isinstance(text, str) else ""


def extract_json(raw_text: str) -> Dict[str, Any]:
    """
    Pull the JSON object embedded in free text: slice from the first "{" to
    the last "}" and decode it. No repair of unbalanced braces is attempted.
    """
    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end < start:
        raise ParseError(NO_JSON_MESSAGE)
    try:
        parsed = json.loads(raw_text[start:end + 1])
    except ValueError as e:
        raise ParseError(BAD_JSON_MESSAGE) from e
    if not isinstance(parsed, dict):
        raise ParseError(BAD_JSON_MESSAGE)
    return parsed


def _veracity(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    v = str(value).strip().lower() if value is not None else ""
    return v if v in VERACITIES else "uncertain"


def _confidence(value) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        c = float(value)
    except (TypeError, ValueError):
        return 0.0
    if c != c:  # NaN
        return 0.0
    return max(0.0, min(1.0, c))


def extract_result(raw_text: str, type: str) -> VerificationResult:
    """Best-effort extended result from a model reply; never raises."""
    try:
        parsed = extract_json(raw_text)
    except ParseError as e:
        logger.info(f"Unparseable model reply for type={type}: {e}")
        return VerificationResult(type=type, veracity="uncertain", confidence=0.0, reasoning=str(e))

    return VerificationResult(
        type=type,
        veracity=_veracity(parsed.get("veracity", "uncertain")),
        confidence=_confidence(parsed.get("confidence", 0.0)),
        reasoning=str(parsed.get("reasoning") or DEFAULT_MESSAGE),
    )


def extract_simple_result(raw_text: str, type: str) -> SimpleVerificationResult:
    """Best-effort {status, message, details} result; never raises."""
    try:
        parsed = extract_json(raw_text)
    except ParseError as e:
        logger.info(f"Unparseable model reply for type={type}: {e}")
        return SimpleVerificationResult(type=type, status="error", message=str(e))

    status = str(parsed.get("status") or "error").strip().lower()
    details = parsed.get("details")
    return SimpleVerificationResult(
        type=type,
        status=status if status in STATUSES else "error",
        message=str(parsed.get("message") or DEFAULT_MESSAGE),
        details=details if isinstance(details, dict) else {},
    )
