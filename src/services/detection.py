from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Optional, Protocol

from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool

from src.app.config import settings
from src.app.domain.models import DetectionResult
from src.services.errors import DetectionResponseError
from src.services.gemini_client import GeminiClient

log = logging.getLogger("detection")

DETECTION_SYSTEM_PROMPT = Path(__file__).parent / "prompts" / "DETECTION_SYSTEM_PROMPT.txt"
_LEADING_FENCE_RE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE_RE = re.compile(r"\n?```$")

SUGGESTIBLE_OPERATIONS: tuple[str, ...] = (
    "base64-decode",
    "hex-decode",
    "url-decode",
    "json-prettify",
    "rot13",
    "sha256",
)


class DetectionPayload(BaseModel):
    format: str
    confidence: float
    explanation: str
    suggestedOperations: list[str]


class JsonModelClient(Protocol):
    def generate_json(self, user_prompt: Any, system_prompt_path: Path, response_schema: Any) -> str:
        ...


def build_detection_prompt(input_text: str, max_chars: int) -> str:
    sample = input_text[:max_chars]
    if len(input_text) > max_chars:
        sample += "..."
    return (
        "Analyze the following data and detect its encoding, hash type, or data format.\n"
        f"Input Data: {sample}\n"
        "Return a JSON object with format, confidence (0-1), explanation, and a list of "
        "suggested operation IDs from this set:\n"
        f"[{', '.join(SUGGESTIBLE_OPERATIONS)}]."
    )


def _strip_code_fence(raw: str) -> str:
    cleaned = _LEADING_FENCE_RE.sub("", raw.strip())
    return _TRAILING_FENCE_RE.sub("", cleaned).strip()


def parse_detection_response(raw: str) -> DetectionResult:
    cleaned = _strip_code_fence(raw or "")
    if not cleaned:
        raise DetectionResponseError("empty response", raw_response=raw)
    try:
        payload = DetectionPayload.model_validate_json(cleaned)
    except ValidationError as err:
        raise DetectionResponseError(str(err), raw_response=raw) from err
    return DetectionResult(
        format=payload.format,
        confidence=payload.confidence,
        explanation=payload.explanation,
        suggested_operations=list(payload.suggestedOperations),
    )


class DetectionService:
    """
    Asks the hosted model what the input looks like.

    Detection is advisory: every failure is logged and turned into None so
    the caller never has to handle an exception from here.
    """

    def __init__(
        self,
        client: Optional[JsonModelClient] = None,
        api_key: Optional[str] = None,
        model_name: str = "gemini-2.5-flash",
        min_input_chars: int = 3,
        max_input_chars: int = 1000,
        system_prompt_path: Path = DETECTION_SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self.api_key = api_key
        self.model_name = model_name
        self.min_input_chars = min_input_chars
        self.max_input_chars = max_input_chars
        self.system_prompt_path = system_prompt_path

    def _get_client(self) -> Optional[JsonModelClient]:
        if self._client is None and self.api_key:
            self._client = GeminiClient(api_key=self.api_key, model_name=self.model_name)
        return self._client

    async def detect(self, input_text: str) -> Optional[DetectionResult]:
        if not input_text or len(input_text) < self.min_input_chars:
            return None

        try:
            client = self._get_client()
            if client is None:
                log.info("detection.skipped reason=no_api_key")
                return None
            prompt = build_detection_prompt(input_text, self.max_input_chars)
            raw = await run_in_threadpool(
                client.generate_json,
                prompt,
                self.system_prompt_path,
                DetectionPayload,
            )
            result = parse_detection_response(raw)
        except Exception as exc:
            log.warning("detection.failed error=%s", exc)
            return None

        log.info(
            "detection.done format=%s confidence=%s suggestions=%d",
            result.format,
            result.confidence,
            len(result.suggested_operations),
        )
        return result


def get_detection_service() -> DetectionService:
    global _DETECTION_SERVICE
    try:
        service = _DETECTION_SERVICE
    except NameError:
        api_key = settings.GEMINI_API_KEY.get_secret_value() if settings.GEMINI_API_KEY else None
        service = _DETECTION_SERVICE = DetectionService(
            api_key=api_key,
            model_name=settings.GEMINI_MODEL,
            min_input_chars=settings.DETECTION_MIN_INPUT_CHARS,
            max_input_chars=settings.DETECTION_MAX_INPUT_CHARS,
        )
    return service


async def analyze_input(input_text: str) -> Optional[DetectionResult]:
    return await get_detection_service().detect(input_text)
