from __future__ import annotations

import json
import logging
import time
from functools import lru_cache
from typing import Any

from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from placement_engine.core.config import settings
from placement_engine.core.errors import ExplanationUnavailableError
from placement_engine.schemas import ExplanationRequest, ExplanationResponse

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are a placement rejection coach. Given a student's profile at the time of "
    "application and the job's listed requirements, explain the rejection. Respond with "
    "a JSON object with keys: type (RULE_BASED or NON_RULE_BASED), coreMismatch, "
    "keyMissingSkills, resumeFeedback, actionPlan, sentiment, and optionally violations "
    "and skillGaps. Base the answer only on the declared profile data and the listed "
    "eligibility criteria."
)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def explanation_enabled() -> bool:
    if not settings.explanation_enabled:
        return False
    if settings.ai_provider != "openai":
        return False
    api_key = (settings.openai_api_key or "").strip()
    return bool(api_key) and not _looks_like_placeholder(api_key)


@lru_cache(maxsize=1)
def _default_client() -> OpenAI:
    return OpenAI(
        api_key=(settings.openai_api_key or "").strip(),
        base_url=settings.openai_base_url,
        timeout=settings.explanation_timeout_s,
        max_retries=settings.openai_max_retries,
    )


class ExplanationClient:
    """Forwards an assembled request to the explanation generator.

    The narrative is treated as a display artifact: only its arrival and
    top-level shape are checked.
    """

    def __init__(
        self,
        client: Any | None = None,
        *,
        model: str | None = None,
        temperature: float = 0.3,
        max_output_tokens: int = 900,
    ) -> None:
        self._client = client
        self._model = model or settings.ai_model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens

    def _resolve_client(self) -> Any:
        if self._client is not None:
            return self._client
        if not explanation_enabled():
            raise ExplanationUnavailableError(
                "Explanation generator is not configured",
                code="llm_disabled",
            )
        return _default_client()

    def explain(self, request: ExplanationRequest) -> ExplanationResponse:
        client = self._resolve_client()
        user_prompt = request.model_dump_json(by_alias=True)
        started = time.perf_counter()
        try:
            response = client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self._temperature,
                response_format={"type": "json_object"},
                max_tokens=self._max_output_tokens,
            )
        except OpenAIError as exc:
            logger.warning("explanation_request_failed model=%s: %s", self._model, exc)
            raise ExplanationUnavailableError(
                "Explanation generator request failed",
                code="llm_exception",
            ) from exc

        latency_ms = int((time.perf_counter() - started) * 1000)
        content = response.choices[0].message.content if response.choices else ""
        if not content:
            logger.warning("explanation_empty_response model=%s latency_ms=%s", self._model, latency_ms)
            raise ExplanationUnavailableError("Explanation generator returned no content", code="empty_response")

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ExplanationUnavailableError(
                "Explanation generator returned invalid JSON",
                code="invalid_json",
            ) from exc

        try:
            explanation = ExplanationResponse.model_validate(parsed)
        except ValidationError as exc:
            raise ExplanationUnavailableError(
                "Explanation generator returned an unexpected shape",
                code="invalid_schema",
            ) from exc

        logger.info(
            "explanation_received model=%s latency_ms=%s snapshot=%s",
            self._model,
            latency_ms,
            request.is_snapshot,
        )
        return explanation
