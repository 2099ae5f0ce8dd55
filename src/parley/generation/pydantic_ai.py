"""
pydantic_ai-backed text generation: provider selection from settings and a
`GeneratorProtocol` implementation used by default for scoring calls.
"""

from types import NoneType
from typing import Any, Callable, Sequence

from openai import AsyncAzureOpenAI
from pydantic_ai import Agent
from pydantic_ai.models import Model
from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.models.bedrock import BedrockConverseModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.anthropic import AnthropicProvider
from pydantic_ai.providers.bedrock import BedrockProvider
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings
from pydantic_ai.usage import UsageLimits

from parley.errors import GenerationError
from parley.generation.protocol import GeneratorProtocol
from parley.logging import get_logger
from parley.models.request import ChatMessage
from parley.settings import ParleySettings, get_settings

logger = get_logger("generation")

DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_ANTHROPIC_MODEL = "claude-3-5-sonnet-20241022"


def _require(value: Any, message: str) -> None:
    if not value:
        raise GenerationError(message)


def _openai_compatible(
    model_name: str,
    *,
    base_url: str | None = None,
    api_key: str | None = None,
) -> OpenAIChatModel:
    provider = OpenAIProvider(base_url=base_url, api_key=api_key)
    return OpenAIChatModel(model_name, provider=provider)


def _openai(settings: ParleySettings, model_name: str | None) -> OpenAIChatModel:
    _require(settings.openai_api_key, "OPENAI_API_KEY is not set")
    return _openai_compatible(
        model_name or settings.openai_model_name or DEFAULT_OPENAI_MODEL,
        base_url=settings.openai_base_url,
        api_key=settings.openai_api_key,
    )


def _ollama(settings: ParleySettings, model_name: str | None) -> OpenAIChatModel:
    model_name = model_name or settings.ollama_model_name
    _require(settings.ollama_url, "PARLEY_OLLAMA_URL is not set")
    _require(model_name, "PARLEY_OLLAMA_MODEL_NAME is not set")
    return _openai_compatible(model_name, base_url=settings.ollama_url)


def _openrouter(settings: ParleySettings, model_name: str | None) -> OpenAIChatModel:
    model_name = model_name or settings.openrouter_model_name
    _require(settings.openrouter_api_key, "OPENROUTER_API_KEY is not set")
    _require(model_name, "PARLEY_OPENROUTER_MODEL_NAME is not set")
    return _openai_compatible(
        model_name, base_url=settings.openrouter_api_url, api_key=settings.openrouter_api_key
    )


def _azure(settings: ParleySettings, model_name: str | None) -> OpenAIChatModel:
    model_name = model_name or settings.azure_model_name
    _require(settings.azure_openai_endpoint, "AZURE_OPENAI_ENDPOINT is not set")
    _require(settings.azure_openai_api_key, "AZURE_OPENAI_API_KEY is not set")
    _require(settings.azure_openai_api_version, "PARLEY_AZURE_OPENAI_API_VERSION is not set")
    _require(model_name, "PARLEY_AZURE_MODEL_NAME is not set")
    client = AsyncAzureOpenAI(
        azure_endpoint=settings.azure_openai_endpoint,
        api_version=settings.azure_openai_api_version,
        api_key=settings.azure_openai_api_key,
    )
    return OpenAIChatModel(model_name, provider=OpenAIProvider(openai_client=client))


def _anthropic(settings: ParleySettings, model_name: str | None) -> AnthropicModel:
    _require(settings.anthropic_api_key, "ANTHROPIC_API_KEY is not set")
    return AnthropicModel(
        model_name or settings.anthropic_model_name or DEFAULT_ANTHROPIC_MODEL,
        provider=AnthropicProvider(api_key=settings.anthropic_api_key),
    )


def _bedrock(settings: ParleySettings, model_name: str | None) -> BedrockConverseModel:
    model_name = model_name or settings.bedrock_model_name
    _require(model_name, "PARLEY_BEDROCK_MODEL_NAME is not set")
    if settings.aws_profile is not None:
        # boto3 resolves region and credentials from the named profile
        return BedrockConverseModel(model_name)
    return BedrockConverseModel(
        model_name, provider=BedrockProvider(region_name=settings.aws_region)
    )


_PROVIDERS: dict[str, Callable[[ParleySettings, str | None], Model]] = {
    "anthropic": _anthropic,
    "azure": _azure,
    "bedrock": _bedrock,
    "ollama": _ollama,
    "openai": _openai,
    "openrouter": _openrouter,
}


def get_model(model_family: str | None = None, model_name: str | None = None) -> Model:
    """Build the evaluator model for ``model_family`` (default: PARLEY_MODEL_FAMILY)."""
    settings = get_settings()
    model_family = model_family or settings.model_family
    _require(model_family, "Model family is not set (PARLEY_MODEL_FAMILY)")
    build = _PROVIDERS.get(model_family)
    if build is None:
        raise GenerationError(f"Model family '{model_family}' not supported")
    return build(settings, model_name)


def get_agent(
    model: Model | str | None = None,
    *,
    system_prompt: str | Sequence[str] = (),
    model_settings: ModelSettings | None = None,
    output_type: Any = str,
    deps_type: type = NoneType,
) -> Agent:
    """Get a PydanticAI agent"""
    settings = get_settings()

    if model_settings is None:
        model_settings = ModelSettings(timeout=settings.model_timeout)
    if model is None:
        model = get_model()

    return Agent(
        model=model,
        output_type=output_type,
        system_prompt=system_prompt,
        deps_type=deps_type,
        model_settings=model_settings,
    )


async def run_agent(
    agent: Agent,
    prompt: str,
    usage_limits: UsageLimits | None = None,
) -> tuple[Any, list[Any]]:
    """Run the agent to completion, returning its output and the visited graph nodes."""
    nodes, result = [], None
    async with agent.iter(prompt, usage_limits=usage_limits) as agent_run:
        async for node in agent_run:
            logger.debug("agent node: %s", type(node).__name__)
            nodes.append(node)
        result = agent_run.result
    return result.output if result else None, nodes


class PydanticAIGenerator(GeneratorProtocol):
    """Generator backed by a pydantic_ai agent with plain-text output.

    ``model`` may be a pydantic_ai model instance, a ``"provider:model"``
    string, or None to resolve one from settings at call time.
    """

    def __init__(self, *, model: Model | str | None = None) -> None:
        self._model = model

    async def generate(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        system_prompt = tuple(m.content for m in messages if m.role == "system")
        prompt = "\n\n".join(m.content for m in messages if m.role != "system")
        model_settings = ModelSettings(
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=get_settings().model_timeout,
        )
        try:
            agent = get_agent(
                self._model, system_prompt=system_prompt, model_settings=model_settings
            )
            output, _nodes = await run_agent(agent, prompt)
        except GenerationError:
            raise
        except Exception as ex:
            raise GenerationError(f"generation call failed: {type(ex).__name__}: {ex}") from ex
        return output or ""
