from .system_info import SystemInfo

__all__ = ["SystemInfo"]
