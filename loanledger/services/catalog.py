from __future__ import annotations

from dataclasses import dataclass

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from loanledger.errors import BookNotFound, CopyNotFound
from loanledger.extensions import db
from loanledger.models.book import Book
from loanledger.models.copy import Copy, CopyStatus
from loanledger.repositories.book_repo import BookRepo
from loanledger.repositories.copy_repo import CopyRepo


@dataclass(frozen=True)
class BookInfo:
    """Display data for a cataloged book."""

    title: str
    author: str
    isbn: str | None = None


class Catalog:
    @staticmethod
    def describe_book(book_id: int) -> BookInfo:
        book = BookRepo.get(book_id)
        if not book:
            raise BookNotFound(book_id)
        return BookInfo(title=book.title, author=book.author, isbn=book.isbn)

    @staticmethod
    def describe_copy(copy_id: int) -> BookInfo:
        return Catalog.describe_book(Catalog.get_copy(copy_id).book_id)

    @staticmethod
    def get_copy(copy_id: int) -> Copy:
        copy = CopyRepo.get(copy_id)
        if not copy:
            raise CopyNotFound(copy_id)
        return copy

    @staticmethod
    def available_copies(book_id: int):
        if not BookRepo.get(book_id):
            raise BookNotFound(book_id)
        return CopyRepo.list_by_book(book_id, status=CopyStatus.AVAILABLE)

    # *** administrative actions ***

    @staticmethod
    def add_book(title: str, author: str, isbn: str | None = None) -> Book:
        title = (title or "").strip()
        author = (author or "").strip()
        if not title or not author:
            raise ValueError("title and author are required")
        if isbn and BookRepo.get_by_isbn(isbn):
            raise ValueError(f"ISBN {isbn} is already registered")
        return BookRepo.create(Book(title=title, author=author, isbn=isbn or None))

    @staticmethod
    def register_copy(book_id: int) -> Copy:
        if not BookRepo.get(book_id):
            raise BookNotFound(book_id)
        copy = CopyRepo.create(Copy(book_id=book_id, status=CopyStatus.AVAILABLE))
        current_app.logger.info(f"[catalog] registered copy={copy.id} book={book_id}")
        return copy

    @staticmethod
    def mark_damaged(copy_id: int) -> Copy:
        """
        Takes a copy out of circulation. An open loan on the copy stays open;
        returning it later leaves the copy damaged.
        """
        copy = Catalog.get_copy(copy_id)
        if copy.status == CopyStatus.DAMAGED:
            return copy

        try:
            copy.status = CopyStatus.DAMAGED
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise

        current_app.logger.info(f"[catalog] copy={copy_id} marked damaged")
        return copy

    @staticmethod
    def reset_damaged(copy_id: int) -> Copy:
        """Puts a damaged copy back; its status is recomputed from loan state."""
        copy = Catalog.get_copy(copy_id)
        if copy.status != CopyStatus.DAMAGED:
            current_app.logger.warning(
                f"[catalog] reset_damaged ignored: copy={copy_id} status={copy.status}"
            )
            return copy

        try:
            if not CopyRepo.undamage(copy_id):
                # reset or re-marked by someone else in the meantime
                db.session.rollback()
                return CopyRepo.get(copy_id)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise

        copy = CopyRepo.get(copy_id)
        current_app.logger.info(f"[catalog] copy={copy_id} reset to {copy.status}")
        return copy
