# src/pr_review/providers/base.py
import json
import re
from abc import ABC, abstractmethod
from pr_review.models.review import ReviewResult


_FENCED_JSON = re.compile(r'```(?:json)?\s*(.*?)\s*```', re.DOTALL)


class LLMProvider(ABC):
    @abstractmethod
    async def review(self, prompt: str) -> ReviewResult:
        """Send prompt to LLM and return parsed review result."""
        pass


def parse_review_result(text: str) -> ReviewResult:
    """Parse model output, which may be wrapped in ```json or just ```."""
    if not text.strip():
        raise ValueError("LLM returned an empty response")

    json_match = _FENCED_JSON.search(text)
    if json_match:
        text = json_match.group(1)

    try:
        result_data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"LLM response is not valid JSON: {e}") from e
    if not isinstance(result_data, dict):
        raise ValueError("LLM response is not a JSON object")
    return ReviewResult(**result_data)
