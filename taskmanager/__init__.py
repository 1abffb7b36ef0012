# taskmanager/__init__.py
"""
Task Manager - 任务跟踪服务

任务存储、状态流转与使用统计，通过 REST、RPC 消息和 WebSocket 对外提供
"""

__version__ = "0.1.0"
