# LLM module
from fashion_ai.llm.llm_adapter import LLMClient, LLMResponse, get_llm_client, reset_llm_client
from fashion_ai.llm.fashion_client import (
    FashionAIClient,
    fashion_client,
    build_classification_messages,
    build_look_messages,
    parse_classification,
    parse_look,
)
