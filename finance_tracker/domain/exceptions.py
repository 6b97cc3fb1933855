"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class TransactionNotFoundError(DomainException):
    """No transaction exists with the requested id"""

    def __init__(self, transaction_id):
        super().__init__(f"Transaction {transaction_id} not found")
        self.transaction_id = transaction_id
