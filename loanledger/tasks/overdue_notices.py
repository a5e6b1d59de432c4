# loanledger/tasks/overdue_notices.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from flask import current_app

from loanledger.errors import LedgerError
from loanledger.extensions import db
from loanledger.repositories.notification_repo import NotificationRepo
from loanledger.services.catalog import Catalog
from loanledger.services.loan_ledger import LoanLedger
from loanledger.services.mail_service import MailService
from loanledger.services.member_directory import MemberDirectory


@dataclass
class NoticeRunResult:
    overdue: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0


def send_overdue_notices(now: datetime | None = None) -> NoticeRunResult:
    """
    Mails every member holding an overdue loan, at most once per loan per day.
    Must run inside an app context. Mail errors are recorded, not raised.
    """
    now = now or datetime.utcnow()
    result = NoticeRunResult()

    try:
        for loan in LoanLedger.list_overdue(now):
            result.overdue += 1

            if NotificationRepo.sent_on(loan.id, now):
                result.skipped += 1
                continue

            try:
                member = MemberDirectory.describe_member(loan.member_id)
                book = Catalog.describe_copy(loan.copy_id)
            except LedgerError as e:
                current_app.logger.warning(f"[overdue_notices] loan={loan.id} skipped: {e}")
                result.failed += 1
                continue

            days = LoanLedger.days_overdue(loan, now)
            fee = LoanLedger.compute_late_fee(loan.id, now)

            if MailService.send_overdue_mail(loan, member, book, days, fee, now):
                result.sent += 1
            else:
                result.failed += 1

        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        f"[overdue_notices] overdue={result.overdue} sent={result.sent} "
        f"failed={result.failed} skipped={result.skipped}"
    )
    return result


def run_overdue_notice_job(app):
    with app.app_context():
        try:
            return send_overdue_notices()
        except Exception as e:
            app.logger.exception(f"[overdue_notices] job failed: {e}")
            return None
