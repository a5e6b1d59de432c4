from loanledger import create_app
from loanledger.config import Config, TestConfig
from loanledger.tasks import scheduler as scheduler_module
from loanledger.tasks.scheduler import stop_scheduler


def test_config_defaults():
    assert Config.LOAN_PERIOD_DAYS == 14
    assert Config.DAILY_FEE == "0.50"


def test_create_app_uses_given_config(app):
    assert app.config["TESTING"]
    assert "apscheduler" not in app.extensions


class SchedulerConfig(TestConfig):
    SCHEDULER_ENABLED = True
    OVERDUE_CHECK_MINUTES = 5


def test_scheduler_registers_overdue_job(monkeypatch):
    monkeypatch.setattr(scheduler_module.atexit, "register", lambda *a: None)

    app = create_app(SchedulerConfig)
    try:
        scheduler = app.extensions["apscheduler"]
        job = scheduler.get_job("overdue_notice_job")
        assert job is not None
        assert job.trigger.interval.total_seconds() == 300
    finally:
        stop_scheduler(app)


def test_scheduler_is_shut_down_at_exit(monkeypatch):
    exit_hooks = []
    monkeypatch.setattr(scheduler_module.atexit, "register", lambda fn, *a: exit_hooks.append((fn, a)))

    app = create_app(SchedulerConfig)
    scheduler = app.extensions["apscheduler"]
    assert scheduler.running
    assert exit_hooks == [(stop_scheduler, (app,))]

    # Act: what the interpreter does on exit
    for fn, args in exit_hooks:
        fn(*args)

    assert not scheduler.running
