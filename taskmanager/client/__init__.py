# taskmanager/client/__init__.py
from taskmanager.client.task_client import SendResult, SendResultKind, TaskClient

__all__ = ['SendResult', 'SendResultKind', 'TaskClient']
