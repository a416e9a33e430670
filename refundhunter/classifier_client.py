"""Claude API client for reimbursement claim classification.

The classifier is an external collaborator: it receives normalized candidate
rows and returns an unvalidated claim list. Any failure is raised as
UpstreamClassificationError so callers never mistake an outage for
"no claims found".
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import anthropic

from . import config as settings
from .classifier_config import CLASSIFIER_SYSTEM_PROMPT, ClassifierConfig
from .errors import ClassifierNotConfiguredError, UpstreamClassificationError

logger = logging.getLogger(__name__)


_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
# Outermost object or array embedded in prose
_EMBEDDED_JSON = (re.compile(r"\{[\s\S]*\}"), re.compile(r"\[[\s\S]*\]"))


def _loads(text: str) -> Any | None:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def parse_structured_response(text: str) -> Any | None:
    """Parse the JSON payload out of a classifier reply.

    Tries, in order: a fenced code block, the whole reply, then the
    outermost object or array found inside surrounding prose.

    Args:
        text: The raw response text from Claude

    Returns:
        Parsed JSON value (object or list) or None if nothing parses
    """
    if not text:
        return None

    fenced = _FENCED_JSON.search(text)
    if fenced:
        parsed = _loads(fenced.group(1).strip())
        if parsed is not None:
            return parsed

    parsed = _loads(text.strip())
    if parsed is not None:
        return parsed

    # Whichever bracket opens first is the outermost value
    matches = [m for m in (p.search(text) for p in _EMBEDDED_JSON) if m]
    for match in sorted(matches, key=lambda m: m.start()):
        parsed = _loads(match.group(0))
        if parsed is not None:
            return parsed

    return None


def extract_claims(parsed: Any) -> list[Any]:
    """Pull the claim list out of a parsed classifier reply.

    Accepts either a bare list or an object with a "claims" list. The items
    themselves are not inspected; that is the validator's job.

    Raises:
        UpstreamClassificationError: If no claim list is present
    """
    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict) and isinstance(parsed.get("claims"), list):
        return parsed["claims"]
    raise UpstreamClassificationError("Classifier response did not contain a claims list")


def build_classifier_prompt(rows: list[dict[str, Any]], max_claims: int) -> str:
    """Build the user prompt listing the rows to review."""
    rows_json = json.dumps(rows, indent=2, default=str)
    return f"""Review these {len(rows)} normalized inventory adjustment rows and identify reimbursement claims.

## Rows
```json
{rows_json}
```

Return at most {max_claims} claims.
Respond with ONLY valid JSON following the response format specified in your instructions. Do not include any text before or after the JSON."""


class ClassifierClient:
    """Blocking client for the external claim classifier.

    Attributes:
        config: Model and response settings
    """

    def __init__(
        self,
        api_key: str | None = None,
        config: ClassifierConfig | None = None,
        client: Any = None,
    ) -> None:
        """Initialize the classifier client.

        Args:
            api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY)
            config: Optional classifier configuration
            client: Optional pre-built Anthropic client, mainly for tests
        """
        self.api_key = api_key if api_key is not None else settings.ANTHROPIC_API_KEY
        self.config = config or ClassifierConfig()
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _get_client(self) -> Any:
        """Lazy-load the Anthropic client."""
        if self._client is None:
            if not self.api_key:
                raise ClassifierNotConfiguredError("ANTHROPIC_API_KEY not set")
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def classify(self, rows: list[dict[str, Any]]) -> list[Any]:
        """Send rows to the classifier and return its raw claim list.

        Args:
            rows: Normalized candidate payloads

        Returns:
            Unvalidated list of claim-shaped items

        Raises:
            ClassifierNotConfiguredError: If no API key is configured
            UpstreamClassificationError: On API errors or unparsable output
        """
        if not rows:
            return []

        client = self._get_client()
        prompt = build_classifier_prompt(rows, self.config.max_claims)

        try:
            response = client.messages.create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                system=CLASSIFIER_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            logger.error(f"Classifier API error: {e}")
            raise UpstreamClassificationError(f"Classifier API error: {e!s}") from e

        content = response.content[0].text if response.content else ""
        logger.info(
            f"Classifier reviewed {len(rows)} rows using "
            f"{response.usage.input_tokens + response.usage.output_tokens} tokens"
        )

        parsed = parse_structured_response(content)
        if parsed is None:
            logger.error("Classifier returned unparsable output")
            raise UpstreamClassificationError(
                "Classifier returned unparsable output", raw_response=content[:2000]
            )

        try:
            return extract_claims(parsed)
        except UpstreamClassificationError as e:
            e.raw_response = content[:2000]
            raise
