"""Sample data generators."""

from loan_finance.generators.loan import LoanRecordGenerator

__all__ = ["LoanRecordGenerator"]
