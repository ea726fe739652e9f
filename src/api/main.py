import logging

from fastapi import FastAPI

from api.routers import assistant, ops, tasks

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Study Assistant")

app.include_router(assistant.router)
app.include_router(tasks.router)
app.include_router(ops.router)


@app.on_event("startup")
async def startup() -> None:
    logger.info("Study assistant API started")
