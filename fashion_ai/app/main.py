"""
Fashion AI Stylist Service v1.0.0
Clothing classification, look suggestions and feedback over an external multimodal model.

API ROUTES:
-----------
- /api/clothing-classify   - Upload + classify, list/filter, update, delete items
- /api/generate-look       - Generate and list look suggestions
- /api/feedback            - Rate looks and read approval statistics
- /api/stats               - Catalog statistics
- /health, /metrics        - Health and monitoring

All data lives in memory and is rebuilt on restart.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fashion_ai.app.routes import router, SERVICE_VERSION
from fashion_ai.config import get_settings, get_llm_config
from fashion_ai.db import store
from fashion_ai.observability import is_logging_enabled

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    logger.info("=" * 50)
    logger.info(f"Fashion AI Stylist Service v{SERVICE_VERSION} Starting...")
    logger.info("=" * 50)

    llm_config = get_llm_config()
    logger.info(f"LLM: {llm_config.provider.value} ({llm_config.model})")
    if not llm_config.is_configured():
        logger.warning("AI_API_KEY not found in environment variables")

    if settings.is_development() and not store.get_all_clothing_items():
        store.seed_sample_data()

    logger.info(f"Logging: {'enabled' if is_logging_enabled() else 'disabled'}")
    logger.info("✓ Service ready! http://localhost:8000")
    logger.info("=" * 50)

    yield

    logger.info("Service shutting down...")


app = FastAPI(
    title="Fashion AI Stylist",
    description="Clothing classification and look suggestions",
    version=SERVICE_VERSION,
    lifespan=lifespan
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

app.include_router(router)
