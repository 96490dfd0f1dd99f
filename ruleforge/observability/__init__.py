"""
Observability: structured logging and Prometheus metrics.
"""

from .logger import CustomJsonFormatter, get_logger, log_operation, setup_logger
from .metrics import generate_metrics, get_content_type, record_validation

__all__ = [
    "CustomJsonFormatter",
    "setup_logger",
    "get_logger",
    "log_operation",
    "generate_metrics",
    "get_content_type",
    "record_validation",
]
