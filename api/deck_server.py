import os
import logging

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from config.logging_config import apply_logging_config
from setup_logging_optimized import get_logger

# Configure logging for the entire application
apply_logging_config()

load_dotenv(override=True)

logger = get_logger(__name__)

ENVIRONMENT = os.getenv("ENV", "development")

if os.getenv("SENTRY_DSN"):
    sentry_logging = LoggingIntegration(
        level=logging.INFO,        # Capture info and above as breadcrumbs
        event_level=logging.ERROR  # Send errors as events
    )
    sentry_sdk.init(
        dsn=os.getenv("SENTRY_DSN"),
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            sentry_logging,
        ],
        traces_sample_rate=0.1,
        environment=ENVIRONMENT,
        release=os.getenv("RENDER_GIT_COMMIT", "unknown"),
        send_default_pii=False,
    )

from agents.generation.exceptions import GenerationError
from api.errors import generation_exception_handler, http_exception_handler
from api.image_generation_endpoint import router as image_generation_router
from api.requests.api_brand_extract import router as brand_extract_router
from api.requests.api_generate_deck import router as generate_deck_router

app = FastAPI(title="Pitch Deck Generation API")

allowed_origins = {origin for origin in os.getenv("ALLOWED_ORIGINS", "").split(",") if origin}
if ENVIRONMENT != "production":
    allowed_origins.update({"http://localhost:3000", "http://127.0.0.1:3000"})

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(GenerationError, generation_exception_handler)

app.include_router(generate_deck_router)
app.include_router(brand_extract_router)
app.include_router(image_generation_router)


@app.get("/api/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "9090"))
    logger.info(f"Starting Pitch Deck Generation API on {host}:{port}")
    uvicorn.run("api.deck_server:app", host=host, port=port, reload=ENVIRONMENT != "production", workers=1)
