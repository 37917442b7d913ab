# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TICKLOOP_APP_NAME": "App display name (default: tickloop).",
    "TICKLOOP_LOG_LEVEL": "Console logging level (default: INFO).",
    "TICKLOOP_LOG_DIR": "Directory for tickloop.log (default: .local/tickloop).",
    "TICKLOOP_LOG_TO_FILE": "Also write a log file (true/false, default: true).",
    # Scheduler
    "TICKLOOP_HALT_ON_TASK_FAILURE": (
        "Stop drain() at the first failing task and raise TaskFailure (default: true). "
        "When false, failures are logged and draining continues."
    ),
    "TICKLOOP_CLOCK": "Time source: monotonic | manual (default: monotonic).",
}
