import logging
from contextlib import asynccontextmanager

import uvicorn
from config import ApplicationConfig
from src.api.app import create_app
from src.depends import create_tables

logging.basicConfig(
    level=ApplicationConfig.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app):
    await create_tables()
    yield


app = create_app(ApplicationConfig, lifespan=lifespan)

if __name__ == "__main__":
    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        reload=ApplicationConfig.ENVIRONMENT == "development",
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )
