# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "ROI_TASKS_APP_NAME": "App display name (default: roi-tasks).",
    "ROI_TASKS_LOG_LEVEL": "Console logging level (default: INFO).",
    "ROI_TASKS_LOG_DIR": "Directory for the debug log file (default: .local/roi_tasks).",
    # Initial load
    "ROI_TASKS_SOURCE": "http(s) URL or local path of the JSON task array (default: tasks.json).",
    "ROI_TASKS_LOAD_TIMEOUT_SECONDS": "HTTP timeout for the initial fetch (default: 10).",
    "ROI_TASKS_SEED_COUNT": "Synthetic tasks generated when the dataset is empty (default: 50).",
    # Normalization
    "ROI_TASKS_STRICT_STATUS": "true: unknown status -> Todo; false: keep unknown status strings (default: true).",
}
