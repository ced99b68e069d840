# Database module (in-memory)
from fashion_ai.db.memory_store import (
    FashionStore,
    store,
    generate_id,
    SAMPLE_ITEMS,
)
