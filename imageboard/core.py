import os
import logging
from prometheus_client import Counter, start_http_server

logger = logging.getLogger(__name__)

METRICS_PORT = int(os.getenv('METRICS_PORT', '8001'))

BOARDS_CREATED = Counter('imageboard_boards_created_total', 'Boards created')
POSTS_CREATED = Counter('imageboard_posts_created_total', 'Posts created', ['kind'])
MEDIA_INGESTED = Counter('imageboard_media_ingested_total', 'Media files ingested', ['ext'])
REQUESTS_REJECTED = Counter('imageboard_requests_rejected_total', 'Requests rejected by the pipeline', ['error'])

def init_metrics(port: int = METRICS_PORT):
    """Initialize Prometheus metrics server"""
    try:
        start_http_server(port)
        logger.info(f"Prometheus metrics server started on port {port}")
    except OSError as e:
        logger.warning(f'Prometheus start failed: {e}')
