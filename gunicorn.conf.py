"""
Gunicorn configuration for the habit progress API.

Run with:
  gunicorn -c gunicorn.conf.py habit_progress.main:app

Env vars that override defaults:
  PORT     — TCP port to bind (default: 8000)
  WORKERS  — number of worker processes (default: 2)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Workers share nothing but the database; the in-memory store is per process.
workers = int(os.environ.get("WORKERS", "2"))

worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5
timeout = 120

loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
