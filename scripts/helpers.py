import re
import json

_FENCED = re.compile(r'```(?:json)?\s*({[\s\S]*?})\s*```')


def extract_clean_json(raw: str | dict) -> dict:
    """Parse a model reply that is plain JSON or wraps it in a ``` block.

    Raises ValueError when no JSON object can be recovered.
    """
    if isinstance(raw, dict):
        return raw
    if not raw or not raw.strip():
        raise ValueError("Empty model response")

    match = _FENCED.search(raw)
    json_str = match.group(1) if match else raw.strip()
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Model response is not JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError("Model response is not a JSON object")
    return data
