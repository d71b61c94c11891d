import os
import logging
import uvicorn

logger = logging.getLogger(__name__)

from app.main import app

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    logger.info(f"Starting server on port {port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
