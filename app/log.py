import logging
import sys

from app.config import settings

LOG_FORMAT = "%(asctime)s [%(process)d] %(levelname)s %(name)s: %(message)s"


def setup_logging() -> None:
    root = logging.getLogger()
    if getattr(root, "_task_tracker_configured", False):
        return

    root.setLevel(settings.LOG_LEVEL.upper())
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    # Errors also land in a file next to the app, same as the gunicorn errorlog
    errors = logging.FileHandler(settings.ERROR_LOG_FILE, delay=True)
    errors.setLevel(logging.ERROR)
    errors.setFormatter(formatter)
    root.addHandler(errors)

    root._task_tracker_configured = True
