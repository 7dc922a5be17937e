"""
LLM Client

One narrow capability: turn a (system, user) prompt pair into a JSON
completion. Gemini and OpenAI are interchangeable providers behind it;
the configured primary is asked first and the other one only if the
primary fails.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class LLMProvider(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"


@dataclass
class LLMConfig:
    provider: LLMProvider
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    openai_model: str = "gpt-4o-mini"
    max_tokens: int = 1024
    temperature: float = 0.4


@dataclass(frozen=True)
class CompletionRequest:
    system_prompt: str
    user_prompt: str
    json_output: bool = False
    temperature: float = 0.4
    max_tokens: int = 1024


@dataclass
class LLMResponse:
    content: str
    model: str
    provider: LLMProvider
    usage: dict = field(default_factory=dict)


class CompletionProvider(ABC):
    """A single hosted model."""

    provider: LLMProvider

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> LLMResponse:
        pass


class GeminiProvider(CompletionProvider):
    provider = LLMProvider.GEMINI

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model

    def _call(self, request: CompletionRequest):
        import google.generativeai as genai

        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(self.model, system_instruction=request.system_prompt)
        generation_config = {
            "temperature": request.temperature,
            "max_output_tokens": request.max_tokens,
        }
        if request.json_output:
            generation_config["response_mime_type"] = "application/json"
        return model.generate_content(request.user_prompt, generation_config=generation_config)

    async def complete(self, request: CompletionRequest) -> LLMResponse:
        # The SDK call is blocking
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(None, self._call, request)

        usage = getattr(response, "usage_metadata", None)
        return LLMResponse(
            content=response.text,
            model=self.model,
            provider=self.provider,
            usage={
                "prompt_tokens": getattr(usage, "prompt_token_count", 0),
                "completion_tokens": getattr(usage, "candidates_token_count", 0),
            },
        )


class OpenAIProvider(CompletionProvider):
    provider = LLMProvider.OPENAI

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model
        self._client = None

    @property
    def client(self):
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def complete(self, request: CompletionRequest) -> LLMResponse:
        extra = {"response_format": {"type": "json_object"}} if request.json_output else {}
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_prompt},
            ],
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            **extra,
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            provider=self.provider,
            usage={
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
            },
        )


def build_providers(config: LLMConfig) -> list[CompletionProvider]:
    """Providers that have a key, configured primary first."""
    available: dict[LLMProvider, CompletionProvider] = {}
    if config.gemini_api_key:
        available[LLMProvider.GEMINI] = GeminiProvider(config.gemini_api_key, config.gemini_model)
    if config.openai_api_key:
        available[LLMProvider.OPENAI] = OpenAIProvider(config.openai_api_key, config.openai_model)

    ordered = sorted(available, key=lambda p: p != config.provider)
    return [available[p] for p in ordered]


class LLMClient:
    """Primary provider with single fallback."""

    def __init__(self, config: LLMConfig):
        self.config = config
        self._providers = build_providers(config)
        if not self._providers:
            logger.warning("No LLM API keys configured. AI insights disabled.")

    @property
    def is_configured(self) -> bool:
        return bool(self._providers)

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        response_format: Optional[str] = None,
    ) -> LLMResponse:
        if not self._providers:
            raise RuntimeError("No LLM providers configured")

        request = CompletionRequest(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            json_output=response_format == "json",
            temperature=self.config.temperature if temperature is None else temperature,
            max_tokens=self.config.max_tokens if max_tokens is None else max_tokens,
        )

        *fallbacks, last = self._providers
        for provider in fallbacks:
            try:
                return await provider.complete(request)
            except Exception as e:
                logger.warning(f"{provider.provider.value} completion failed: {e}, trying next provider")
        return await last.complete(request)


# Singleton instance
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create LLM client singleton."""
    global _llm_client
    if _llm_client is None:
        from coindash.core.config import settings

        _llm_client = LLMClient(
            LLMConfig(
                provider=LLMProvider(settings.llm_primary_provider),
                gemini_api_key=settings.gemini_api_key,
                openai_api_key=settings.openai_api_key,
                gemini_model=settings.llm_gemini_model,
                openai_model=settings.llm_openai_model,
                max_tokens=settings.llm_max_tokens,
                temperature=settings.llm_temperature,
            )
        )
    return _llm_client
