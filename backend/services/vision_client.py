"""
Gemini client for reading card names off a photo.

The missing list is sent along with the image so the model can answer with
names from that list. Whatever it answers is still untrusted: names come back
as UnvalidatedCandidate and must go through backend.core.reconcile before use.
"""

import base64
import json
import logging
import pathlib
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from backend.core.reconcile import UnvalidatedCandidate

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-3-pro-preview"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MIME_TYPE = "image/jpeg"

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
}

_DATA_URL_PATTERN = re.compile(r"^data:(image/\w+);base64,")


class VisionClientError(Exception):
    """Base exception for vision client errors."""

    pass


class VisionUnavailableError(VisionClientError):
    """Raised when the Gemini API cannot be reached."""

    pass


class VisionAPIError(VisionClientError):
    """Raised when the Gemini API returns an error response."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


def split_data_url(image: str) -> Tuple[str, str]:
    """
    Split an image into (mime_type, base64 payload).

    Accepts a data URL as produced by FileReader.readAsDataURL, or bare base64
    (assumed JPEG).
    """
    match = _DATA_URL_PATTERN.match(image)
    if match:
        return match.group(1), image[match.end():]
    return DEFAULT_MIME_TYPE, image


def encode_image_file(path: "pathlib.Path | str") -> str:
    """Read an image file and return it as a data URL."""
    path = pathlib.Path(path)
    mime_type = MIME_TYPES.get(path.suffix.lower(), DEFAULT_MIME_TYPE)
    payload = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def build_prompt(canonical_list: Sequence[str]) -> str:
    """Build the instruction text sent alongside the image."""
    missing = "\n".join(f"- {name}" for name in canonical_list)
    return f"""You are analyzing a photo of Pokemon trading cards. Your task is to identify which Pokemon cards are visible in this image.

Here is my list of missing Pokemon cards that I'm looking for:
{missing}

Please examine the image carefully and identify ANY Pokemon card names that are visible on the cards in the photo. Look at the name printed on each card (usually at the top of the card).

IMPORTANT:
- Only report Pokemon names that you can actually see written on cards in the image
- Match the names against my missing list above
- Report ONLY the names from my missing list that appear in the image
- If a card name has slight variations (like "Pikachu V" vs "Pikachu"), still match it if the base name is the same

Respond with ONLY a JSON array of the matching Pokemon names from my missing list, nothing else.
If no matches are found, respond with an empty array: []

Example response format: ["Pikachu", "Charizard", "Mewtwo"]"""


def _strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    if cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_model_text(text: str, canonical_list: Sequence[str]) -> List[UnvalidatedCandidate]:
    """
    Turn the model's text answer into candidate names.

    The answer should be a JSON array of strings, possibly inside a markdown
    code fence. If it is not valid JSON, fall back to scanning the raw text
    for each missing-list name (case-insensitive).
    """
    try:
        parsed = json.loads(_strip_code_fence(text))
    except json.JSONDecodeError as e:
        logger.warning(f"Vision response is not JSON ({e}); scanning text for list names")
        lowered = text.lower()
        return [
            UnvalidatedCandidate(name)
            for name in canonical_list
            if name.lower() in lowered
        ]

    if not isinstance(parsed, list):
        logger.warning(f"Vision response is JSON but not an array: {type(parsed).__name__}")
        return []

    return [UnvalidatedCandidate(item) for item in parsed if isinstance(item, str)]


def extract_response_text(data: Dict[str, Any]) -> Optional[str]:
    """Pull candidates[0].content.parts[0].text out of a generateContent response."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


class GeminiVisionClient:
    """
    Gemini generateContent client.

    Implements application.ports.VisionDetector.
    """

    TEMPERATURE = 0.1  # low temperature for precise matching
    TOP_P = 0.8

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        max_output_tokens: int = 8192,
        timeout: float = 120.0,
    ):
        """
        Initialize the vision client.

        Args:
            api_key: Gemini API key
            model: Model name (default: gemini-3-pro-preview)
            base_url: Base URL of the Gemini REST API
            max_output_tokens: Output budget, including thinking tokens
            timeout: Request timeout in seconds
        """
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._max_output_tokens = max_output_tokens
        self._timeout = timeout

    @property
    def model(self) -> str:
        return self._model

    def build_request_body(self, image: str, canonical_list: Sequence[str]) -> Dict[str, Any]:
        """Build the generateContent payload: inline image followed by the prompt."""
        mime_type, data = split_data_url(image)
        return {
            "contents": [
                {
                    "parts": [
                        {"inline_data": {"mime_type": mime_type, "data": data}},
                        {"text": build_prompt(canonical_list)},
                    ],
                },
            ],
            "generationConfig": {
                "temperature": self.TEMPERATURE,
                "topP": self.TOP_P,
                "maxOutputTokens": self._max_output_tokens,
            },
        }

    async def detect_names(
        self,
        image: str,
        canonical_list: Sequence[str],
    ) -> List[UnvalidatedCandidate]:
        """
        Ask Gemini which missing-list cards are visible in the image.

        Args:
            image: Data URL or bare base64 image
            canonical_list: The missing list, included in the prompt

        Returns:
            Candidate names as reported by the model (unvalidated)

        Raises:
            VisionAPIError: If Gemini returns an error response or a non-JSON body
            VisionUnavailableError: If Gemini is not reachable or the transfer fails
        """
        url = f"{self._base_url}/models/{self._model}:generateContent"
        payload = self.build_request_body(image, canonical_list)

        logger.debug(
            f"Vision request: model={self._model} "
            f"mime={payload['contents'][0]['parts'][0]['inline_data']['mime_type']} "
            f"list_size={len(canonical_list)}"
        )

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    url,
                    params={"key": self._api_key},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )

                if response.status_code != 200:
                    message = self._error_message(response)
                    logger.error(f"Gemini API error: {response.status_code} - {message}")
                    raise VisionAPIError(message, response.status_code)

                try:
                    data = response.json()
                except ValueError as e:
                    logger.error(f"Gemini API returned a non-JSON body: {e}")
                    raise VisionAPIError(
                        "Gemini returned a malformed response", response.status_code
                    ) from e

        except httpx.ConnectError as e:
            logger.error(f"Gemini API unavailable: {e}")
            raise VisionUnavailableError("Gemini API is not reachable") from e
        except httpx.TimeoutException as e:
            logger.error(f"Gemini API timeout: {e}")
            raise VisionUnavailableError("Gemini API request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Gemini API transport error: {e}")
            raise VisionUnavailableError(f"Gemini API request failed: {e}") from e

        text = extract_response_text(data)
        if not text:
            logger.warning("No text in Gemini response")
            return []

        logger.debug(f"Vision response text: {text}")
        return parse_model_text(text, canonical_list)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Prefer the API's error.message; fall back to the status text."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
        return f"Gemini API error: {response.reason_phrase or response.status_code}"
