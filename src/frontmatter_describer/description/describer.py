"""SEO description generation via chat-completion APIs."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Protocol
from urllib import request as urllib_request
from urllib.error import HTTPError, URLError

import anthropic
from anthropic.types import Message, TextBlock

from frontmatter_describer.config import (
    DEFAULT_API_URL,
    DEFAULT_MODELS,
    PROVIDER_ANTHROPIC,
    PROVIDER_OPENAI,
)

if TYPE_CHECKING:
    from frontmatter_describer.config import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 300
DEFAULT_TEMPERATURE = 0.7

SEO_DESCRIPTION_PROMPT = """
You are an AI model specializing in generating concise and effective SEO descriptions \
from article content. Your goal is to create a compelling summary that encourages clicks \
from search engine results.

Your input will be the full text of an article.

Your output should be an SEO description meeting the following criteria:

1.  **Conciseness:** The description should be a short paragraph with one or two \
sentences, each no longer than 30 words. Use one sentence if you can.
2.  **Keyword Inclusion:** Identify and incorporate the most relevant keywords from the \
article that are likely to be used by users searching for this topic.
3.  **Simple English:** Use clear, easy-to-understand language accessible to a broad \
audience. Avoid jargon or overly complex sentences.
4.  **Compelling:** Write the description in a way that accurately reflects the article's \
content while also enticing users to click and read more.
5.  **No extra information:** Do not include any extra information, characters, symbols. \
Just output the plain text of the description.

Generate the SEO description based on the provided article content.
"""


class GenerationError(Exception):
    """Raised when a description could not be generated."""


class GenerationHttpError(GenerationError):
    """Raised when the generation service returns a non-2xx response."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"Generation API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class EmptyGenerationError(GenerationError):
    """Raised when the response carries no generated text."""


class Describer(Protocol):
    def describe(self, body: str) -> str: ...


class OpenAIDescriber:
    """Generates descriptions through an OpenAI-compatible chat-completion endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODELS[PROVIDER_OPENAI],
        api_url: str = DEFAULT_API_URL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float | None = None,
    ) -> None:
        """Initialise the describer.

        Args:
            api_key: Bearer token for the endpoint.
            model: Model identifier sent with every request.
            api_url: Full chat-completion URL.
            max_tokens: Max output tokens per request.
            temperature: Sampling temperature.
            timeout: Socket timeout in seconds; None keeps the urllib default.
        """
        self._api_key = api_key
        self._model = model
        self._api_url = api_url
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._timeout = timeout

    def build_payload(self, body: str) -> dict[str, Any]:
        """Return the JSON request body for one description request."""
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SEO_DESCRIPTION_PROMPT},
                {"role": "user", "content": body},
            ],
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }

    def describe(self, body: str) -> str:
        """Request a description for the given article body.

        Args:
            body: Article text sent as the user turn.

        Returns:
            Generated description, trimmed. Its length and style are not checked.

        Raises:
            GenerationHttpError: If the endpoint returns a non-2xx status code.
            EmptyGenerationError: If the response has no generated text.
            GenerationError: If the request cannot be sent or the reply is not JSON.
        """
        req = urllib_request.Request(
            self._api_url,
            data=json.dumps(self.build_payload(body)).encode("utf-8"),
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            method="POST",
        )
        logger.info(
            "[describe] sending request; model:%s;body_chars:%d",
            self._model,
            len(body),
        )
        kwargs: dict[str, Any] = {}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        try:
            with urllib_request.urlopen(req, **kwargs) as resp:
                status = resp.status
                raw = resp.read()
        except HTTPError as exc:
            raise GenerationHttpError(exc.code, _error_detail(exc)) from exc
        except URLError as exc:
            raise GenerationError(f"Request failed: {exc.reason}") from exc

        if not 200 <= status < 300:
            raise GenerationHttpError(status, "unexpected status")
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise GenerationError("Response is not valid JSON") from exc

        result = _extract_choice_text(data)
        logger.info("[describe] received response; description:%s", result)
        return result


class AnthropicDescriber:
    """Generates descriptions using Claude through the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODELS[PROVIDER_ANTHROPIC],
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        """Initialise the Anthropic client.

        SDK retries are disabled; a failed request fails the file.

        Args:
            api_key: Anthropic API key.
            model: Model identifier to use for generation.
            max_tokens: Max output tokens per request.
            temperature: Sampling temperature.
        """
        self._client = anthropic.Anthropic(api_key=api_key, max_retries=0)
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature

    def describe(self, body: str) -> str:
        """Request a description for the given article body.

        Raises:
            GenerationHttpError: If the API returns an error status.
            EmptyGenerationError: If the response has no text.
            GenerationError: If the API cannot be reached.
        """
        logger.info(
            "[describe] sending anthropic request; model:%s;body_chars:%d",
            self._model,
            len(body),
        )
        try:
            message = self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                system=SEO_DESCRIPTION_PROMPT,
                messages=[{"role": "user", "content": body}],
            )
        except anthropic.APIStatusError as exc:
            raise GenerationHttpError(exc.status_code, exc.message) from exc
        except anthropic.APIConnectionError as exc:
            raise GenerationError(f"Request failed: {exc}") from exc

        result = _extract_message_text(message)
        logger.info("[describe] received response; description:%s", result)
        return result


def _error_detail(exc: HTTPError) -> str:
    """Pull the API's error message out of an HTTPError, falling back to its reason."""
    try:
        detail = json.loads(exc.read()).get("error", {}).get("message")
    except Exception:
        detail = None
    return str(detail or exc.reason)


def _extract_choice_text(data: Any) -> str:
    """Return ``choices[0].message.content`` trimmed.

    Raises:
        EmptyGenerationError: If the field is missing, not text, or blank.
    """
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None
    if not isinstance(content, str) or not content.strip():
        raise EmptyGenerationError("No description generated")
    return content.strip()


def _extract_message_text(message: Message) -> str:
    """Return the first non-blank TextBlock of an Anthropic message, trimmed."""
    for block in message.content:
        if isinstance(block, TextBlock) and block.text.strip():
            return block.text.strip()
    raise EmptyGenerationError("No description generated")


def describer_from_config(config: AppConfig) -> Describer:
    """Construct the describer for the configured provider.

    Args:
        config: Application configuration instance.

    Returns:
        OpenAIDescriber, or AnthropicDescriber when provider is ``anthropic``.
    """
    if config.provider == PROVIDER_ANTHROPIC:
        return AnthropicDescriber(
            api_key=config.api_key,
            model=config.model,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    return OpenAIDescriber(
        api_key=config.api_key,
        model=config.model,
        api_url=config.api_url,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        timeout=config.request_timeout,
    )
