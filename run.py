#!/usr/bin/env python3
import uvicorn
import logging
import os
from datetime import datetime
from school_api.core.config import settings

# Create the log directory if needed
log_dir = settings.LOG_DIR
if not os.path.exists(log_dir):
    os.makedirs(log_dir)

level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

logger = logging.getLogger()
logger.setLevel(level)

console_handler = logging.StreamHandler()
console_handler.setLevel(level)

# One log file per launch
log_filename = os.path.join(log_dir, f"app_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")
file_handler = logging.FileHandler(log_filename, encoding='utf-8')
file_handler.setLevel(level)

formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
console_handler.setFormatter(formatter)
file_handler.setFormatter(formatter)

# Drop handlers installed elsewhere before adding ours
logger.handlers = []
logger.addHandler(console_handler)
logger.addHandler(file_handler)


if __name__ == "__main__":
    logger.info(f"Starting API server on {settings.HOST}:{settings.PORT}")
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND}, overrides: {settings.STORAGE_BACKEND_OVERRIDES}")
    logger.info(f"Log file: {log_filename}")
    uvicorn.run(
        "school_api.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
    )
