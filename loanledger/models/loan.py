from sqlalchemy import text

from loanledger.extensions import db

class Loan(db.Model):
    __tablename__ = "loans"
    __table_args__ = (
        db.CheckConstraint("due_at > loaned_at", name="ck_loans_due_after_loan"),
        db.CheckConstraint(
            "returned_at IS NULL OR returned_at >= loaned_at",
            name="ck_loans_return_after_loan",
        ),
        # at most one open loan per copy
        db.Index(
            "ux_loans_open_copy",
            "copy_id",
            unique=True,
            sqlite_where=text("returned_at IS NULL"),
            postgresql_where=text("returned_at IS NULL"),
        ),
    )

    id = db.Column(db.Integer, primary_key=True)

    copy_id = db.Column(db.Integer, db.ForeignKey("copies.id"), nullable=False, index=True)
    member_id = db.Column(db.Integer, db.ForeignKey("members.id"), nullable=False, index=True)
    librarian_id = db.Column(db.Integer, db.ForeignKey("members.id"), nullable=True)

    loaned_at = db.Column(db.DateTime, nullable=False)
    due_at = db.Column(db.DateTime, nullable=False, index=True)
    returned_at = db.Column(db.DateTime, nullable=True)

    copy = db.relationship("Copy", backref="loans")
    member = db.relationship("Member", foreign_keys=[member_id], backref="loans")
    librarian = db.relationship("Member", foreign_keys=[librarian_id])

    @property
    def is_open(self) -> bool:
        return self.returned_at is None

    @property
    def status(self) -> str:
        return "open" if self.returned_at is None else "closed"
