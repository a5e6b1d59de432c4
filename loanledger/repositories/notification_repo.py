from datetime import datetime, timedelta

from loanledger.models.notification_log import NotificationLog
from loanledger.extensions import db

class NotificationRepo:
    @staticmethod
    def sent_on(loan_id: int, day: datetime, notif_type: str = "overdue") -> bool:
        start = datetime(day.year, day.month, day.day)
        return NotificationLog.query.filter(
            NotificationLog.loan_id == loan_id,
            NotificationLog.type == notif_type,
            NotificationLog.success.is_(True),
            NotificationLog.sent_at >= start,
            NotificationLog.sent_at < start + timedelta(days=1),
        ).first() is not None

    @staticmethod
    def list_by_loan(loan_id: int):
        return NotificationLog.query.filter_by(loan_id=loan_id).order_by(NotificationLog.id).all()

    @staticmethod
    def log(entry: NotificationLog):
        # no commit: the job commits once at the end
        db.session.add(entry)
        return entry
