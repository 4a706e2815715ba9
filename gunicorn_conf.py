import multiprocessing
import os

# Gunicorn configuration file
# Run with: gunicorn -c gunicorn_conf.py app.main:app

wsgi_app = "app.main:app"

bind = os.getenv("BIND", "0.0.0.0:8000")

# Every worker keeps its own lazily created database engine
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

# Timeout and Keepalive
timeout = 60
keepalive = 5

# Logging
accesslog = "-" # Log to stdout
errorlog = "-"  # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Process management
proc_name = "task_tracker_api"
reload = False  # Set to True for development only
