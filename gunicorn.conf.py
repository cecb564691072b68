"""
Gunicorn configuration.

One process with a thread pool: the rate limiter and the memory storage
backend are process-local, so more workers would split their state.
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8080')}"
wsgi_app = "LicenseCloud.wsgi:application"
worker_class = "gthread"
workers = 1
threads = int(os.environ.get("GUNICORN_THREADS", "8"))
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "30"))
graceful_timeout = 30
accesslog = None
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()


def worker_exit(server, worker):
    from licenses.infrastructure.storage.factory import reset_storage

    reset_storage()
