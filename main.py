"""
Quiz Funnel API Entry Point

  uvicorn main:app --host 0.0.0.0 --port $PORT
"""

import logging

from quizfunnel import config

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

from api_server import app  # noqa: E402

__all__ = ["app"]


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
