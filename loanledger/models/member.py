from datetime import datetime
from loanledger.extensions import db

class Member(db.Model):
    __tablename__ = "members"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=True, index=True)

    role = db.Column(db.String(20), nullable=False, default="member")  # member/librarian

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
