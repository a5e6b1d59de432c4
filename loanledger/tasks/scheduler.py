# loanledger/tasks/scheduler.py
from __future__ import annotations

import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger


def start_scheduler(app):
    """
    Runs the overdue notice job every OVERDUE_CHECK_MINUTES.
    - Under the debug reloader only the real (child) process starts it.
    - The scheduler is stored in app.extensions["apscheduler"] and shut
      down at interpreter exit.
    """
    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader parent process: scheduler skipped.")
        return None

    # imported here to keep create_app -> tasks -> services import order simple
    from loanledger.tasks.overdue_notices import run_overdue_notice_job

    minutes = int(app.config.get("OVERDUE_CHECK_MINUTES", 60))
    scheduler = BackgroundScheduler(timezone="UTC")

    scheduler.add_job(
        func=run_overdue_notice_job,
        args=[app],
        trigger=IntervalTrigger(minutes=minutes),
        id="overdue_notice_job",
        replace_existing=True,
        max_instances=1,        # never overlap two runs
        coalesce=True,          # missed runs collapse into one
        misfire_grace_time=120
    )

    scheduler.start()
    app.logger.info(f"[scheduler] Overdue notice job started (every {minutes} minutes).")

    app.extensions["apscheduler"] = scheduler
    atexit.register(stop_scheduler, app)
    return scheduler


def stop_scheduler(app):
    sch = app.extensions.get("apscheduler")
    if sch and getattr(sch, "running", False):
        sch.shutdown(wait=False)
        app.logger.info("[scheduler] Scheduler shutdown.")
