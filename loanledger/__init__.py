from flask import Flask

from loanledger.config import Config
from loanledger.extensions import db, migrate, mail


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    migrate.init_app(app, db)
    mail.init_app(app)

    # register models on the metadata (create_all / migrate)
    from loanledger import models  # noqa: F401

    if app.config.get("SCHEDULER_ENABLED"):
        from loanledger.tasks.scheduler import start_scheduler
        start_scheduler(app)

    return app
