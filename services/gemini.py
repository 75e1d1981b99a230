# services/gemini.py
import functools
import logging

import httpx
from google import genai
from google.genai import types, errors as gerrors
from pydantic import ValidationError

from config import settings
from core.estimation import EstimationFailure, NutritionEstimate
from scripts.helpers import extract_clean_json

_LOG = logging.getLogger(__name__)

# ───────────── Prompts ─────────────
SYSTEM_PROMPT = (
    "You are a nutrition expert AI that analyzes meal descriptions and provides "
    "accurate calorie and macronutrient estimates. Always be conservative in "
    "estimates and provide realistic values."
)

USER_PROMPT = """Analyze the following meal description and provide a JSON response with estimated calories and macronutrients. Be conservative in estimates.

Meal: "{meal_text}"

Provide response in this exact JSON format:
{{
  "calories": number,
  "protein": number (in grams),
  "carbs": number (in grams),
  "fat": number (in grams)
}}"""


# ───────────── Estimator ─────────────
class GeminiEstimator:
    """Single-shot macro estimate from Gemini; no retry, no cache."""

    def __init__(
        self,
        client: genai.Client | None,
        model: str | None = None,
        temperature: float | None = None,
    ) -> None:
        self._client = client   # None when no API key is configured
        self.model = model or settings.gemini_model
        self.temperature = (
            settings.estimator_temperature if temperature is None else temperature
        )

    async def estimate(self, meal_text: str) -> NutritionEstimate:
        if not meal_text or not meal_text.strip():
            raise EstimationFailure("Meal text is required")
        if self._client is None:
            _LOG.warning("GEMINI_API_KEY not set, meal estimation unavailable")
            raise EstimationFailure("Estimator not configured")

        try:
            resp = await self._client.aio.models.generate_content(
                model=self.model,
                contents=[USER_PROMPT.format(meal_text=meal_text.strip())],
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_PROMPT,
                    temperature=self.temperature,
                    response_mime_type="application/json",
                ),
            )
        except (gerrors.APIError, httpx.HTTPError) as exc:
            _LOG.warning("Gemini estimate failed: %s", exc)
            raise EstimationFailure("Estimator unavailable") from exc

        raw = resp.text
        if not raw:
            raise EstimationFailure("No response from estimator")
        try:
            return NutritionEstimate.model_validate(extract_clean_json(raw))
        except (ValueError, ValidationError) as exc:
            _LOG.warning("Malformed estimator output %r: %s", raw, exc)
            raise EstimationFailure("Malformed estimator response") from exc


# ───────────── Dependency ─────────────
@functools.lru_cache(maxsize=4)
def _client(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


def get_estimator() -> GeminiEstimator:
    key = settings.gemini_api_key
    return GeminiEstimator(_client(key) if key else None)
