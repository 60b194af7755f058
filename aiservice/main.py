"""FastAPI application entry point."""
from fastapi import FastAPI

from aiservice.logging_config import configure_logging
from aiservice.routers import health, recommendations


configure_logging()

app = FastAPI(title="Fitness AI Recommendation API")


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple liveness check."""
    return {"status": "ok"}


# Include routers
app.include_router(health.router)
app.include_router(recommendations.router)
