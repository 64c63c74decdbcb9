import os
from typing import Dict, Any


def get_rabbitmq_config() -> Dict[str, Any]:
    """Get RabbitMQ configuration from environment variables"""
    return {
        "host": os.getenv("RABBITMQ_HOST", "localhost"),
        "port": int(os.getenv("RABBITMQ_PORT", 5672)),
        "vhost": os.getenv("RABBITMQ_VHOST", "/"),
        "username": os.getenv("RABBITMQ_USERNAME", "guest"),
        "password": os.getenv("RABBITMQ_PASSWORD", "guest"),
        "queue_name": os.getenv("RABBITMQ_QUEUE", "schedule_grid"),
        "heartbeat": int(os.getenv("RABBITMQ_HEARTBEAT", 600)),
        "connection_attempts": int(os.getenv("RABBITMQ_CONNECTION_ATTEMPTS", 3)),
        "retry_delay": int(os.getenv("RABBITMQ_RETRY_DELAY", 5)),
    }


def get_app_config() -> Dict[str, Any]:
    """Get application configuration from environment variables"""
    return {
        "debug": os.getenv("DEBUG", "False").lower() == "true",
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }


def get_schedule_api_config() -> Dict[str, Any]:
    """Get schedule backend configuration from environment variables"""
    return {
        "base_url": os.getenv("SCHEDULE_API_URL", "http://localhost:8080/api"),
        "timeout": float(os.getenv("SCHEDULE_API_TIMEOUT", 10)),
    }


def get_grid_config() -> Dict[str, Any]:
    """Get visible grid window (days and hours) from environment variables"""
    hour_min = int(os.getenv("GRID_HOUR_MIN", 7))
    hour_max = int(os.getenv("GRID_HOUR_MAX", 14))
    days = [int(day) for day in os.getenv("GRID_DAYS", "1,2,3,4,5").split(",") if day.strip()]
    return {
        "days": days,
        "hour_min": hour_min,
        "hour_max": hour_max,
        "hours": list(range(hour_min, hour_max + 1)),
    }
