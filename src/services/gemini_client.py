from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import httpx
from google import genai
from google.genai import types
from google.genai.errors import ClientError

from src.services.errors import NetworkTimeoutError, RateLimitedError, ServiceError


class GeminiConfigurationError(ServiceError):
    pass


class GeminiPromptError(ServiceError):
    pass


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        timeout_seconds: float = 30.0,
        client: Optional[genai.Client] = None,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self._client = client or self._configure_api()

    def _configure_api(self) -> genai.Client:
        if not self.api_key:
            raise GeminiConfigurationError("Missing Google API key.")
        return genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=int(self.timeout_seconds * 1000)),
        )

    def _load_system_prompt(self, file_path: Path) -> str:
        try:
            return file_path.read_text(encoding="utf-8")
        except FileNotFoundError as not_found_error:
            raise GeminiPromptError(f"Prompt file not found: {file_path}") from not_found_error
        except (OSError, IOError) as io_error:
            raise GeminiPromptError(f"Unable to read prompt file: {io_error}") from io_error

    def _serialize_prompt(self, user_prompt: str | dict[str, str | int | float | list | dict]) -> str:
        if isinstance(user_prompt, str):
            return user_prompt
        try:
            return json.dumps(user_prompt, indent=2, ensure_ascii=False)
        except TypeError:
            return str(user_prompt)

    def generate_json(
        self,
        user_prompt: str | dict[str, str | int | float | list | dict],
        system_prompt_path: Path,
        response_schema: Any,
    ) -> str:
        """
        Ask the model for a JSON document constrained to response_schema.

        Raises:
            GeminiPromptError: If the system prompt cannot be read
            RateLimitedError: On HTTP 429 / RESOURCE_EXHAUSTED
            NetworkTimeoutError: If the call exceeds timeout_seconds
        """
        system_instruction = self._load_system_prompt(system_prompt_path)
        payload = self._serialize_prompt(user_prompt)
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=response_schema,
        )
        try:
            response = self._client.models.generate_content(
                model=self.model_name,
                contents=payload,
                config=config,
            )
        except ClientError as err:
            status_code = getattr(err, "code", None)
            message = str(err)
            if status_code == 429 or "RESOURCE_EXHAUSTED" in message:
                raise RateLimitedError("Gemini API rate limit reached. Try again shortly.") from err
            raise
        except httpx.TimeoutException as err:
            raise NetworkTimeoutError("gemini", self.timeout_seconds) from err

        return response.text or ""
