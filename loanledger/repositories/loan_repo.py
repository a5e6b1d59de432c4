from datetime import datetime

from sqlalchemy import update

from loanledger.models.loan import Loan
from loanledger.extensions import db

class LoanRepo:
    @staticmethod
    def get(loan_id: int):
        return db.session.get(Loan, loan_id)

    @staticmethod
    def add(loan: Loan):
        # no commit: caller owns the transaction
        db.session.add(loan)
        db.session.flush()
        return loan

    @staticmethod
    def open_for_copy(copy_id: int):
        return Loan.query.filter(
            Loan.copy_id == copy_id,
            Loan.returned_at.is_(None)
        ).first()

    @staticmethod
    def list_by_member(member_id: int, open_only: bool = False):
        q = Loan.query.filter_by(member_id=member_id)
        if open_only:
            q = q.filter(Loan.returned_at.is_(None))
        return q.order_by(Loan.loaned_at.desc(), Loan.id.desc()).all()

    @staticmethod
    def close(loan_id: int, returned_at: datetime) -> bool:
        """Sets returned_at only if the loan is still open. Does not commit."""
        result = db.session.execute(
            update(Loan)
            .where(Loan.id == loan_id, Loan.returned_at.is_(None))
            .values(returned_at=returned_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def overdue_query(now: datetime):
        # Query objects re-execute on every iteration: lazy and restartable
        return Loan.query.filter(
            Loan.returned_at.is_(None),
            Loan.due_at < now
        ).order_by(Loan.due_at.asc(), Loan.id.asc())

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()
