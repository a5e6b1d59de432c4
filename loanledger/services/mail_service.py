# loanledger/services/mail_service.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from flask import current_app
from flask_mail import Message

from loanledger.extensions import mail
from loanledger.models.notification_log import NotificationLog
from loanledger.repositories.notification_repo import NotificationRepo
from loanledger.services.catalog import BookInfo
from loanledger.services.member_directory import MemberInfo


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:  # smtplib / socket errors all end up here
            current_app.logger.warning(f"[MailService] mail to {to_email} failed: {e}")
            return False, str(e)

    @staticmethod
    def log_notification(
        loan_id: int,
        notif_type: str,
        to_email: str | None,
        message: str,
        success: bool,
        error: str | None = None,
        sent_at: datetime | None = None,
    ) -> NotificationLog:
        row = NotificationLog(
            loan_id=loan_id,
            type=notif_type,
            email=to_email,
            message=message,
            success=bool(success),
            error_message=error,
            sent_at=sent_at or datetime.utcnow(),
        )
        return NotificationRepo.log(row)

    @staticmethod
    def overdue_body(member: MemberInfo, book: BookInfo, due_at, days: int, fee: Decimal) -> str:
        return (
            f"Hello {member.name},\n\n"
            f"'{book.title}' by {book.author} was due on {due_at:%Y-%m-%d}.\n"
            f"It is {days} day(s) overdue; the late fee so far is {fee}.\n\n"
            f"Please return it as soon as possible.\n"
        )

    @staticmethod
    def send_overdue_mail(loan, member: MemberInfo, book: BookInfo, days: int, fee: Decimal,
                          now: datetime) -> bool:
        """
        Sends the overdue notice for one loan and records the attempt.
        Does not commit.
        """
        if not member.email:
            MailService.log_notification(
                loan_id=loan.id,
                notif_type="overdue",
                to_email=None,
                message="member has no email address",
                success=False,
                error="missing_email",
                sent_at=now,
            )
            return False

        subject = f"Library: '{book.title}' is overdue"
        body = MailService.overdue_body(member, book, loan.due_at, days, fee)
        ok, err = MailService.send_email(member.email, subject, body)

        MailService.log_notification(
            loan_id=loan.id,
            notif_type="overdue",
            to_email=member.email,
            message=body,
            success=ok,
            error=err,
            sent_at=now,
        )
        return ok
