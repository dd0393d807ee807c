# src/contextpack/llm_service.py
"""Service for LLM interactions, handling both real and mock LLMs."""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from llama_index.core.base.llms.types import ChatMessage, MessageRole

from contextpack.config import API_KEY_ENV_VARS, SUPPORTED_PROVIDERS
from contextpack.errors import ContextPackError, ProviderError, create_model_format_error
from contextpack.mock_llm import MockLLM

logger = logging.getLogger(__name__)


class ModelSpec(NamedTuple):
    provider: str
    model_id: str

    @property
    def config_key(self) -> str:
        return f"{self.provider}:{self.model_id}"


def parse_model_spec(model_specification: str) -> ModelSpec:
    """
    Parse a 'provider:model_id' string.

    Raises:
        ConfigError: If the format is wrong or the provider is unsupported.
    """
    provider, sep, model_id = model_specification.strip().partition(":")
    if not sep or not provider or not model_id or provider not in SUPPORTED_PROVIDERS:
        raise create_model_format_error(model_specification.strip())
    return ModelSpec(provider=provider, model_id=model_id)


def parse_model_list(models) -> List[ModelSpec]:
    """
    Parse model specifications, dropping repeats.

    Args:
        models (str | Sequence[str]): Comma-separated string or a list of
            'provider:model_id' entries.

    Returns:
        List[ModelSpec]: Specs in first-seen order.
    """
    entries = models.split(",") if isinstance(models, str) else models
    specs: List[ModelSpec] = []
    for model in entries:
        if not model.strip():
            continue
        spec = parse_model_spec(model)
        if spec in specs:
            logger.warning(f"Model {spec.config_key} listed more than once; querying it once")
            continue
        specs.append(spec)
    return specs


@dataclass
class LLMResponse:
    model_spec: ModelSpec
    text: Optional[str] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    is_mock: bool = False

    @property
    def config_key(self) -> str:
        return self.model_spec.config_key


def _build_provider_llm(model_spec: ModelSpec, api_key: str):
    # Provider clients are imported on demand so one broken extra does not
    # take down the others.
    if model_spec.provider == "openai":
        from llama_index.llms.openai import OpenAI

        if model_spec.model_id.startswith("gpt-4o"):
            return OpenAI(model=model_spec.model_id, api_key=api_key, strict=False)
        return OpenAI(model=model_spec.model_id, api_key=api_key)
    if model_spec.provider == "anthropic":
        from llama_index.llms.anthropic import Anthropic

        return Anthropic(model=model_spec.model_id, api_key=api_key)
    if model_spec.provider == "google":
        from llama_index.llms.google_genai import GoogleGenAI

        return GoogleGenAI(model=model_spec.model_id, api_key=api_key)
    if model_spec.provider == "openrouter":
        from llama_index.llms.openrouter import OpenRouter

        return OpenRouter(model=model_spec.model_id, api_key=api_key)
    raise ProviderError(f"No client available for provider \"{model_spec.provider}\"")


class LLMService:
    def __init__(
        self,
        model_spec: ModelSpec,
        use_mock: bool = False,
        system_prompt: Optional[str] = None,
    ):
        self.model_spec = model_spec
        self.use_mock = use_mock
        self.system_prompt = system_prompt
        self.llm = self._initialize_llm()

    def _initialize_llm(self):
        if self.use_mock:
            logger.info(f"Using mock LLM (model: {self.model_spec.config_key})")
            return MockLLM(model=self.model_spec.config_key)

        env_var = API_KEY_ENV_VARS[self.model_spec.provider]
        api_key = os.getenv(env_var)
        if not api_key:
            logger.warning(
                f"{env_var} not found. Switching to mock LLM for {self.model_spec.config_key}. "
                f"Set {env_var} environment variable for actual LLM usage."
            )
            self.use_mock = True  # Force mock if key is missing
            return MockLLM(model=self.model_spec.config_key)

        logger.info(f"Initializing {self.model_spec.provider} LLM (model: {self.model_spec.model_id})")
        try:
            return _build_provider_llm(self.model_spec, api_key)
        except ContextPackError:
            raise
        except Exception as e:
            raise ProviderError(
                f"Could not initialize {self.model_spec.config_key}: {str(e)}",
                [
                    f"Check that the llama-index integration for {self.model_spec.provider} is installed",
                    f"Check that {env_var} holds a valid API key",
                ],
            ) from e

    def build_messages(self, prompt: str) -> List[ChatMessage]:
        messages = []
        if self.system_prompt:
            messages.append(ChatMessage(role=MessageRole.SYSTEM, content=self.system_prompt))
        messages.append(ChatMessage(role=MessageRole.USER, content=prompt))
        return messages

    async def generate(self, prompt: str) -> LLMResponse:
        """
        Send the prompt to the model.

        Provider failures are captured on the response rather than raised so
        one failing model does not affect the others.
        """
        metadata: Dict[str, Any] = {"provider": self.model_spec.provider, "model": self.model_spec.model_id}
        if self.system_prompt:
            metadata["system_prompt"] = self.system_prompt
        try:
            response = await self.llm.achat(self.build_messages(prompt))
        except Exception as e:
            logger.error(f"Error querying {self.model_spec.config_key}: {str(e)}")
            return LLMResponse(
                model_spec=self.model_spec, error=str(e), metadata=metadata, is_mock=self.use_mock
            )

        if isinstance(response.raw, dict):
            metadata["raw"] = response.raw
        return LLMResponse(
            model_spec=self.model_spec,
            text=response.message.content,
            metadata=metadata,
            is_mock=self.use_mock,
        )

    @property
    def is_mock(self) -> bool:
        return self.use_mock


async def query_models(services: Sequence[LLMService], prompt: str) -> List[LLMResponse]:
    """Query every model concurrently, keeping the services' order."""
    return list(await asyncio.gather(*(service.generate(prompt) for service in services)))
