from .llm import (
    create_provider,
    BaseLLMProvider,
    Message,
    Provider,
    list_models,
)
