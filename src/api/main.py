"""
FastAPI application entry point.

Read-only API over triggered job run history.
"""

import os

from dotenv import load_dotenv
from fastapi import FastAPI

from src import __version__
from src.infra.logging_config import setup_logging
from .routers import history

load_dotenv()
logger = setup_logging(os.getenv("LOG_LEVEL", "INFO"))

# Tag metadata for Swagger UI
tags_metadata = [
    {
        "name": "history",
        "description": "Triggered job run history - status, timing, and output/error logs per run",
    },
]

app = FastAPI(
    title="Triggered Job History API",
    description="""
## Triggered Job History API

Browse the run history of triggered background jobs.

Each run is stored under `<JOBS_DATA_PATH>/triggered/<job_name>/<run_id>/` with a
`status` document, an `output.log` and an `error.log`. Only the most recent
`JOB_RUNS_HISTORY_SIZE` runs of each job are kept.

### Usage
```bash
uvicorn src.api.main:app --host 127.0.0.1 --port 8000
curl http://localhost:8000/jobs/triggered/nightly-report/history
```
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


app.include_router(history.router, prefix="/jobs/triggered", tags=["history"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
