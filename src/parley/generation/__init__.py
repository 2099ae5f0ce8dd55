from parley.generation.protocol import GeneratorProtocol
from parley.generation.pydantic_ai import PydanticAIGenerator

__all__ = ["GeneratorProtocol", "PydanticAIGenerator"]
