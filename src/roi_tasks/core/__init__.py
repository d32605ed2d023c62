# src/roi_tasks/core/__init__.py
