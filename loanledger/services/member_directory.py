from __future__ import annotations

from dataclasses import dataclass

from loanledger.errors import MemberNotFound
from loanledger.models.member import Member
from loanledger.repositories.member_repo import MemberRepo

ROLES = ("member", "librarian")


@dataclass(frozen=True)
class MemberInfo:
    name: str
    email: str | None = None


class MemberDirectory:
    @staticmethod
    def get_member(member_id: int) -> Member:
        member = MemberRepo.get(member_id)
        if not member:
            raise MemberNotFound(member_id)
        return member

    @staticmethod
    def describe_member(member_id: int) -> MemberInfo:
        member = MemberDirectory.get_member(member_id)
        return MemberInfo(name=member.name, email=member.email)

    @staticmethod
    def is_librarian(member_id: int) -> bool:
        return MemberDirectory.get_member(member_id).role == "librarian"

    @staticmethod
    def register_member(name: str, email: str | None = None, role: str = "member") -> Member:
        name = (name or "").strip()
        if not name:
            raise ValueError("name is required")
        if role not in ROLES:
            raise ValueError(f"role must be one of {ROLES}")
        if email and MemberRepo.get_by_email(email):
            raise ValueError(f"{email} is already registered")
        return MemberRepo.create(Member(name=name, email=email or None, role=role))
