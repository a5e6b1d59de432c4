from loanledger.models.member import Member
from loanledger.extensions import db

class MemberRepo:
    @staticmethod
    def get(member_id: int):
        return db.session.get(Member, member_id)

    @staticmethod
    def get_by_email(email: str):
        return Member.query.filter_by(email=email).first()

    @staticmethod
    def create(member: Member):
        db.session.add(member)
        db.session.commit()
        return member
