"""Dockerfile generation through a hosted language model."""

import logging
import os
import re
import threading
from typing import Optional

import requests

from ..core.constants import (
    API_KEY_ENV_VARS,
    DEFAULT_GENERATION_MODEL,
    DOCKERFILE_PROMPT,
    GENERATION_API_URL,
    GENERATION_TIMEOUT,
    MODEL_ENV_VAR,
)
from .exceptions import (
    GenerationConfigError,
    GenerationError,
    GenerationInProgressError,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to generate Dockerfile. Please try again."
API_KEY_HEADER = "x-goog-api-key"


def api_key_from_env() -> Optional[str]:
    """Return the first API key found in the environment."""
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


def strip_code_fences(content: str) -> str:
    """Remove markdown fences a model may wrap around the file."""
    content = re.sub(r"^```[\w-]*\s*", "", content.strip())
    content = re.sub(r"\s*```$", "", content)
    return content.strip()


class DockerfileGenerationService:
    """Service that turns a plain-language description into a Dockerfile.

    Only one request may be outstanding per service instance. The returned
    text is not checked for Dockerfile syntax.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 timeout: int = GENERATION_TIMEOUT):
        """Initialize generation service."""
        self.api_key = api_key if api_key is not None else api_key_from_env()
        self.model = model or os.environ.get(MODEL_ENV_VAR) or DEFAULT_GENERATION_MODEL
        self.timeout = timeout
        self._lock = threading.Lock()

    def build_prompt(self, description: str) -> str:
        return DOCKERFILE_PROMPT.format(description=description)

    def generate(self, description: str) -> str:
        """Generate Dockerfile content.

        Args:
            description: What the application is and how it is built

        Returns:
            Generated Dockerfile text, possibly empty

        Raises:
            GenerationConfigError: If no API key is configured
            GenerationInProgressError: If another request is outstanding
            GenerationError: If the upstream call fails
        """
        if not self.api_key:
            raise GenerationConfigError(
                "Gemini API key is missing. Set GEMINI_API_KEY or pass --api-key."
            )

        if not self._lock.acquire(blocking=False):
            raise GenerationInProgressError("A Dockerfile generation request is already running.")
        try:
            return self._request(description)
        finally:
            self._lock.release()

    def _request(self, description: str) -> str:
        url = GENERATION_API_URL.format(model=self.model)
        payload = {"contents": [{"parts": [{"text": self.build_prompt(description)}]}]}
        logger.debug(f"Requesting Dockerfile from model {self.model}")

        try:
            response = requests.post(
                url,
                headers={API_KEY_HEADER: self.api_key},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            # exception text from requests can carry the request URL
            status = getattr(getattr(e, "response", None), "status_code", None)
            logger.error(f"Generation API error: {type(e).__name__} (status {status})")
            raise GenerationError(GENERIC_FAILURE) from e

        try:
            parts = data["candidates"][0]["content"].get("parts", [])
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error(f"Unexpected generation response: {data!r}")
            raise GenerationError(GENERIC_FAILURE) from e

        text = "".join(part.get("text", "") for part in parts)
        return strip_code_fences(text)
