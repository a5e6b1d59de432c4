from datetime import datetime
from loanledger.extensions import db


class CopyStatus:
    AVAILABLE = "available"
    LOANED = "loaned"
    DAMAGED = "damaged"

    ALL = (AVAILABLE, LOANED, DAMAGED)


class Copy(db.Model):
    __tablename__ = "copies"
    __table_args__ = (
        db.CheckConstraint(
            "status IN ({})".format(", ".join(f"'{s}'" for s in CopyStatus.ALL)),
            name="ck_copies_status",
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    # cached view of loan state; only LoanLedger / Catalog write it, inside the
    # same transaction as the loan change
    status = db.Column(db.String(20), nullable=False, default=CopyStatus.AVAILABLE)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    book = db.relationship("Book", backref="copies")
