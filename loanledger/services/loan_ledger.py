from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from loanledger.errors import (
    AlreadyReturned,
    CopyNotFound,
    CopyUnavailable,
    InvalidTimestamp,
    LoanNotFound,
    MemberNotFound,
)
from loanledger.models.copy import CopyStatus
from loanledger.models.loan import Loan
from loanledger.repositories.copy_repo import CopyRepo
from loanledger.repositories.loan_repo import LoanRepo
from loanledger.repositories.member_repo import MemberRepo

CENT = Decimal("0.01")


def _calc_days_overdue(due_at: datetime, end: datetime) -> int:
    # calendar-day difference, time of day is ignored
    return max(0, (end.date() - due_at.date()).days)


class LoanLedger:
    """Checkout / return lifecycle of copies plus overdue and late-fee reads.

    Every mutating call is one transaction: it either commits the loan change
    together with the copy status change, or rolls back and raises.
    `now` is always supplied by the caller.
    """

    @staticmethod
    def _loan_period() -> timedelta:
        days = int(current_app.config.get("LOAN_PERIOD_DAYS", 14))
        if days <= 0:
            raise ValueError("LOAN_PERIOD_DAYS must be positive")
        return timedelta(days=days)

    @staticmethod
    def checkout(copy_id: int, member_id: int, librarian_id: int | None, now: datetime) -> Loan:
        if not MemberRepo.get(member_id):
            raise MemberNotFound(member_id)
        if librarian_id is not None and not MemberRepo.get(librarian_id):
            raise MemberNotFound(librarian_id)

        due_at = now + LoanLedger._loan_period()

        try:
            # the status flip decides the race: only one caller sees available -> loaned
            if not CopyRepo.transition(copy_id, CopyStatus.AVAILABLE, CopyStatus.LOANED):
                LoanRepo.rollback()
                copy = CopyRepo.get(copy_id)
                if not copy:
                    raise CopyNotFound(copy_id)
                current_app.logger.warning(
                    f"[loan_ledger] checkout refused: copy={copy_id} status={copy.status}"
                )
                raise CopyUnavailable(copy_id, copy.status)

            loan = LoanRepo.add(Loan(
                copy_id=copy_id,
                member_id=member_id,
                librarian_id=librarian_id,
                loaned_at=now,
                due_at=due_at,
            ))
            LoanRepo.commit()
        except IntegrityError:
            # open-loan unique index caught a copy whose status had drifted
            LoanRepo.rollback()
            current_app.logger.warning(f"[loan_ledger] checkout refused: copy={copy_id} has an open loan")
            raise CopyUnavailable(copy_id, CopyStatus.LOANED)
        except SQLAlchemyError:
            LoanRepo.rollback()
            raise

        current_app.logger.info(
            f"[loan_ledger] checkout loan={loan.id} copy={copy_id} member={member_id} due={loan.due_at}"
        )
        return loan

    @staticmethod
    def return_loan(loan_id: int, now: datetime) -> Loan:
        loan = LoanRepo.get(loan_id)
        if not loan:
            raise LoanNotFound(loan_id)
        if loan.returned_at is not None:
            raise AlreadyReturned(loan_id)
        if now < loan.loaned_at:
            raise InvalidTimestamp(
                f"Return time {now} precedes checkout time {loan.loaned_at} of loan {loan_id}"
            )

        try:
            if not LoanRepo.close(loan_id, now):
                # closed by a concurrent return between the read and the update
                LoanRepo.rollback()
                raise AlreadyReturned(loan_id)

            if not CopyRepo.mark_available_if_loaned(loan.copy_id):
                current_app.logger.info(
                    f"[loan_ledger] copy={loan.copy_id} not flipped to available (damaged)"
                )
            LoanRepo.commit()
        except SQLAlchemyError:
            LoanRepo.rollback()
            raise

        current_app.logger.info(f"[loan_ledger] return loan={loan_id} copy={loan.copy_id}")
        return loan

    @staticmethod
    def list_overdue(now: datetime):
        """
        Open loans with due_at < now, oldest due first.
        The result is lazy and can be iterated any number of times.
        """
        return LoanRepo.overdue_query(now)

    @staticmethod
    def days_overdue(loan: Loan, now: datetime) -> int:
        end = loan.returned_at if loan.returned_at is not None else now
        return _calc_days_overdue(loan.due_at, end)

    @staticmethod
    def compute_late_fee(loan_id: int, now: datetime, daily_rate=None) -> Decimal:
        loan = LoanRepo.get(loan_id)
        if not loan:
            raise LoanNotFound(loan_id)

        if daily_rate is None:
            daily_rate = current_app.config.get("DAILY_FEE", "0.50")
        rate = Decimal(str(daily_rate))
        if rate < 0:
            raise ValueError("daily_rate must not be negative")

        days = LoanLedger.days_overdue(loan, now)
        return (rate * days).quantize(CENT)

    @staticmethod
    def get_loan(loan_id: int) -> Loan:
        loan = LoanRepo.get(loan_id)
        if not loan:
            raise LoanNotFound(loan_id)
        return loan

    @staticmethod
    def open_loan_for_copy(copy_id: int) -> Loan | None:
        return LoanRepo.open_for_copy(copy_id)

    @staticmethod
    def loans_for_member(member_id: int, open_only: bool = False):
        if not MemberRepo.get(member_id):
            raise MemberNotFound(member_id)
        return LoanRepo.list_by_member(member_id, open_only=open_only)
