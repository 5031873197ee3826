"""Services module - Business logic layer."""

from .config_service import ConfigService, get_config_service
from .task_service import TaskService, get_task_service

__all__ = [
    "ConfigService",
    "TaskService",
    "get_config_service",
    "get_task_service",
]
