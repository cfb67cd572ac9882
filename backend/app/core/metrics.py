"""
Prometheus metrics configuration
"""
import os

from prometheus_client import (CONTENT_TYPE_LATEST, CollectorRegistry, Counter,
                               Gauge, Histogram, Info, generate_latest)
from prometheus_client.multiprocess import MultiProcessCollector
from prometheus_client.registry import REGISTRY

# Check if we're in multiprocess mode
if os.environ.get('PROMETHEUS_MULTIPROC_DIR'):
    _EXPOSITION_REGISTRY = CollectorRegistry()
    MultiProcessCollector(_EXPOSITION_REGISTRY)
else:
    _EXPOSITION_REGISTRY = REGISTRY

# ============================================================================
# HTTP Request Metrics
# ============================================================================

http_requests_total = Counter(
    'http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint', 'status_code'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
)

http_errors_total = Counter(
    'http_errors_total',
    'Total number of HTTP errors',
    ['method', 'endpoint', 'status_code', 'error_type']
)

# ============================================================================
# Database Metrics
# ============================================================================

db_queries_total = Counter(
    'db_queries_total',
    'Total number of database queries',
    ['operation', 'table']  # operation: 'select', 'insert', 'update', 'delete'
)

db_query_duration_seconds = Histogram(
    'db_query_duration_seconds',
    'Database query duration in seconds',
    ['operation', 'table'],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5)
)

db_connection_pool_size = Gauge(
    'db_connection_pool_size',
    'Database connection pool size',
    ['state']  # state: 'active', 'idle'
)

# ============================================================================
# Content Metrics
# ============================================================================

content_entities_created_total = Counter(
    'content_entities_created_total',
    'Total number of content entities created',
    ['entity']  # entity: 'post', 'comment', 'community', 'event'
)

content_entities_deleted_total = Counter(
    'content_entities_deleted_total',
    'Total number of content entities deleted',
    ['entity']
)

likes_toggled_total = Counter(
    'likes_toggled_total',
    'Total number of like toggles',
    ['target', 'action']  # target: 'post', 'comment'; action: 'like', 'unlike'
)

media_uploads_total = Counter(
    'media_uploads_total',
    'Total number of media uploads forwarded to the media host',
    ['status']  # status: 'success', 'rejected', 'failed'
)

media_upload_duration_seconds = Histogram(
    'media_upload_duration_seconds',
    'Media host upload duration in seconds',
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)
)

# ============================================================================
# System Info
# ============================================================================

app_info = Info(
    'app_info',
    'Application information'
)

from app.core.config import get_settings

try:
    app_info.info(get_settings().info())
except Exception:
    pass  # Settings may not be available during import

# ============================================================================
# Helper Functions
# ============================================================================

def get_metrics() -> bytes:
    """
    Get Prometheus metrics in text format
    """
    return generate_latest(_EXPOSITION_REGISTRY)


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
