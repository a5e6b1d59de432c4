from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from loanledger import create_app
from loanledger.config import TestConfig
from loanledger.extensions import db
from loanledger.services.catalog import Catalog
from loanledger.services.member_directory import MemberDirectory

DAY0 = datetime(2024, 3, 1, 10, 30)


def day(n: int, hour: int = 10, minute: int = 30) -> datetime:
    """Timestamp `n` days after DAY0, at the given time of day."""
    return (DAY0 + timedelta(days=n)).replace(hour=hour, minute=minute)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def seed(app):
    """One book with three copies, two members and a librarian."""
    book = Catalog.add_book("Dune", "Frank Herbert", "9780441013593")
    copies = [Catalog.register_copy(book.id) for _ in range(3)]
    alice = MemberDirectory.register_member("Alice", "alice@example.org")
    bob = MemberDirectory.register_member("Bob", "bob@example.org")
    librarian = MemberDirectory.register_member("Lib", "lib@example.org", role="librarian")
    return SimpleNamespace(
        book=book.id,
        copy1=copies[0].id,
        copy2=copies[1].id,
        copy3=copies[2].id,
        alice=alice.id,
        bob=bob.id,
        librarian=librarian.id,
    )
