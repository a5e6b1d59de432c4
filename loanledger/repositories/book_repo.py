from loanledger.models.book import Book
from loanledger.extensions import db

class BookRepo:
    @staticmethod
    def get(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    def get_by_isbn(isbn: str):
        return Book.query.filter_by(isbn=isbn).first()

    @staticmethod
    def create(book: Book):
        db.session.add(book)
        db.session.commit()
        return book
