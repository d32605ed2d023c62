# src/roi_tasks/tasks/__init__.py
