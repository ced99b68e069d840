# Config module
from fashion_ai.config.settings import get_settings, reload_settings, Settings
from fashion_ai.config.llm_config import (
    LLMProvider,
    ActiveLLMConfig,
    get_llm_config,
    reset_llm_config,
)
