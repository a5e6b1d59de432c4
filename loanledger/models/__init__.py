from loanledger.models.book import Book
from loanledger.models.copy import Copy, CopyStatus
from loanledger.models.member import Member
from loanledger.models.loan import Loan
from loanledger.models.notification_log import NotificationLog
