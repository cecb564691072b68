"""
Metrics exporter setup.

Starts the Prometheus HTTP exporter when a port is configured.
"""

import logging
import socket

from django.conf import settings
from prometheus_client import start_http_server

logger = logging.getLogger(__name__)


def setup_metrics_exporter() -> bool:
    """
    Start the Prometheus metrics server.

    The exporter runs on PROMETHEUS_PORT; when the setting is unset or the
    port is already bound (e.g. by another thread of this process) nothing
    is started.

    Returns:
        True if a server was started
    """
    prometheus_port = settings.PROMETHEUS_PORT
    if not prometheus_port:
        logger.debug("PROMETHEUS_PORT not set, metrics exporter disabled")
        return False

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        in_use = sock.connect_ex(("127.0.0.1", prometheus_port)) == 0
    finally:
        sock.close()

    if in_use:
        logger.info("Prometheus metrics server already running on port %s", prometheus_port)
        return False

    try:
        start_http_server(prometheus_port, addr="0.0.0.0")
    except OSError as e:
        logger.warning("Could not start Prometheus metrics server: %s", e)
        return False

    logger.info("Prometheus metrics server started on 0.0.0.0:%s", prometheus_port)
    return True
