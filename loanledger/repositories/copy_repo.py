from __future__ import annotations

from sqlalchemy import case, select, update

from loanledger.models.copy import Copy, CopyStatus
from loanledger.models.loan import Loan
from loanledger.extensions import db

class CopyRepo:
    @staticmethod
    def get(copy_id: int):
        return db.session.get(Copy, copy_id)

    @staticmethod
    def list_by_book(book_id: int, status: str | None = None):
        q = Copy.query.filter_by(book_id=book_id)
        if status:
            q = q.filter_by(status=status)
        return q.order_by(Copy.id).all()

    @staticmethod
    def create(copy: Copy):
        db.session.add(copy)
        db.session.commit()
        return copy

    @staticmethod
    def transition(copy_id: int, from_status: str, to_status: str) -> bool:
        """
        Conditional status flip (compare-and-set). Does not commit.
        Returns True only if the row was in `from_status` and got updated, so
        two racing callers can never both win.
        """
        result = db.session.execute(
            update(Copy)
            .where(Copy.id == copy_id, Copy.status == from_status)
            .values(status=to_status)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def mark_available_if_loaned(copy_id: int) -> bool:
        # damaged copies keep their status
        return CopyRepo.transition(copy_id, CopyStatus.LOANED, CopyStatus.AVAILABLE)

    @staticmethod
    def undamage(copy_id: int) -> bool:
        """
        damaged -> loaned if an open loan exists, else available.
        The loan lookup runs inside the UPDATE itself. Does not commit.
        """
        has_open_loan = (
            select(Loan.id)
            .where(Loan.copy_id == copy_id, Loan.returned_at.is_(None))
            .exists()
        )
        result = db.session.execute(
            update(Copy)
            .where(Copy.id == copy_id, Copy.status == CopyStatus.DAMAGED)
            .values(status=case((has_open_loan, CopyStatus.LOANED), else_=CopyStatus.AVAILABLE))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
