import logging
import time
from typing import Optional

import httpx
import openai
from openai import AsyncOpenAI

from .exceptions import ServiceError
from .interfaces import ILLMProvider
from .pipeline.config import Defaults, Limits
from .utils import clean_json_response

logger = logging.getLogger("llm")

PLATFORM = "gemini"
DEFAULT_TEMPERATURE = 0.2


class CustomLLMProvider(ILLMProvider):
    def __init__(
        self,
        api_key: str,
        base_url: str = Defaults.LLM_BASE_URL,
        model: str = Defaults.LLM_MODEL,
        timeout: float = Limits.LLM_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initializes the LLM provider against an OpenAI-compatible endpoint.
        Defaults to Gemini's OpenAI compatibility layer.
        """
        self._http_client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(connect=30.0, read=timeout, write=timeout, pool=30.0)
        )
        self.client = AsyncOpenAI(
            base_url=base_url,
            api_key=api_key,
            http_client=self._http_client,
            max_retries=0,
        )
        self.model = model

    async def aclose(self):
        await self.client.close()

    async def prompt(self, prompt_text: str, system_prompt: str = "", temperature: Optional[float] = None) -> str:
        """
        Sends a completion request to the LLM.
        """
        return await self._complete("prompt", prompt_text, system_prompt, temperature)

    async def prompt_json(self, prompt_text: str, system_prompt: str = "", temperature: Optional[float] = None) -> dict:
        """
        Requests JSON output. Raises ServiceError if the reply is not a JSON object.
        """
        content = await self._complete(
            "prompt_json", prompt_text, system_prompt, temperature,
            response_format={"type": "json_object"},
        )
        data = clean_json_response(content)
        if not isinstance(data, dict):
            raise ServiceError(PLATFORM, f"Response is not a JSON object (response_len={len(content)})")
        return data

    async def _complete(self, call: str, prompt_text: str, system_prompt: str, temperature, **kwargs) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt_text})

        # Keep prompt + completion under the context budget, assuming ~0.3 tokens per character
        estimated_prompt_tokens = int(len(prompt_text) * 0.3)
        max_tokens = max(4096, Limits.LLM_MAX_TOKENS - estimated_prompt_tokens)

        logger.debug(f"{call}() calling {self.model}... (prompt_len={len(prompt_text)})")
        t0 = time.time()
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=DEFAULT_TEMPERATURE if temperature is None else temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
        except openai.APIStatusError as e:
            logger.error(f"{call}() failed after {time.time() - t0:.1f}s: {e}")
            raise ServiceError(PLATFORM, _status_message(e), status_code=e.status_code) from e
        except openai.APIError as e:
            logger.error(f"{call}() failed after {time.time() - t0:.1f}s: {e}")
            raise ServiceError(PLATFORM, e.message or "Request failed") from e

        if not response.choices:
            raise ServiceError(PLATFORM, "Response contained no choices")
        content = response.choices[0].message.content or ""
        if not content.strip():
            raise ServiceError(PLATFORM, "Response was empty")

        logger.debug(f"{call}() returned in {time.time() - t0:.1f}s (response_len={len(content)})")
        return content


def _status_message(error: "openai.APIStatusError") -> str:
    body = error.body
    if isinstance(body, dict):
        nested = body.get("error")
        if isinstance(nested, dict) and nested.get("message"):
            return nested["message"]
        if body.get("message"):
            return body["message"]
    return error.message or "Unknown error"
