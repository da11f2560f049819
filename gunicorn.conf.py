"""Gunicorn config for the toll analytics API."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uploads are held in worker memory; keep one worker unless only /api/analyze is used
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))

timeout = 120
accesslog = "-"
errorlog = "-"
loglevel = "info"
