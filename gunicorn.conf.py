import os

# gunicorn -c gunicorn.conf.py wsgi:app
bind = os.getenv("BIND", "0.0.0.0:8000")
workers = int(os.getenv("WEB_CONCURRENCY", "2"))

# Threads share the flag registry; it is read-only after create_app()
worker_class = "gthread"
threads = int(os.getenv("WEB_THREADS", "2"))

loglevel = os.getenv("LOG_LEVEL", "info").lower()
accesslog = "-"

# Build registry and settings once, before forking
preload_app = True
