import threading

import pytest

from loanledger import create_app
from loanledger.config import TestConfig
from loanledger.errors import AlreadyReturned, CopyUnavailable
from loanledger.extensions import db
from loanledger.models.copy import CopyStatus
from loanledger.models.loan import Loan
from loanledger.services.catalog import Catalog
from loanledger.services.loan_ledger import LoanLedger
from loanledger.services.member_directory import MemberDirectory

from conftest import DAY0, day

WORKERS = 6


@pytest.fixture
def file_app(tmp_path):
    # in-memory SQLite shares one connection; a file gives each thread its own
    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'race.db'}"
        SQLALCHEMY_ENGINE_OPTIONS = {"connect_args": {"timeout": 30}}

    app = create_app(FileConfig)
    with app.app_context():
        db.create_all()
        book = Catalog.add_book("Solaris", "Stanislaw Lem")
        copy_id = Catalog.register_copy(book.id).id
        member_ids = [MemberDirectory.register_member(f"m{i}").id for i in range(WORKERS)]
    yield app, copy_id, member_ids
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


def run_together(app, target, args_list):
    barrier = threading.Barrier(len(args_list))
    outcomes = [None] * len(args_list)

    def worker(i, args):
        with app.app_context():
            barrier.wait()
            try:
                outcomes[i] = target(*args)
            except (CopyUnavailable, AlreadyReturned) as e:
                outcomes[i] = e
            finally:
                db.session.remove()

    threads = [threading.Thread(target=worker, args=(i, a)) for i, a in enumerate(args_list)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)
    return outcomes


def test_racing_checkouts_yield_one_loan(file_app):
    app, copy_id, member_ids = file_app

    outcomes = run_together(
        app, LoanLedger.checkout, [(copy_id, m, None, DAY0) for m in member_ids]
    )

    winners = [o for o in outcomes if isinstance(o, Loan)]
    losers = [o for o in outcomes if isinstance(o, CopyUnavailable)]
    assert len(winners) == 1
    assert len(losers) == WORKERS - 1
    with app.app_context():
        assert Loan.query.filter_by(copy_id=copy_id).count() == 1
        assert Catalog.get_copy(copy_id).status == CopyStatus.LOANED


def test_racing_returns_close_loan_once(file_app):
    app, copy_id, member_ids = file_app
    with app.app_context():
        loan_id = LoanLedger.checkout(copy_id, member_ids[0], None, DAY0).id

    outcomes = run_together(app, LoanLedger.return_loan, [(loan_id, day(2))] * WORKERS)

    assert sum(isinstance(o, Loan) for o in outcomes) == 1
    assert sum(isinstance(o, AlreadyReturned) for o in outcomes) == WORKERS - 1
    with app.app_context():
        assert Catalog.get_copy(copy_id).status == CopyStatus.AVAILABLE
