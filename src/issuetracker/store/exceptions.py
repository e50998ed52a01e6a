"""Custom exceptions for the issue store."""


class IssueStoreError(Exception):
    """The store failed to carry out a read or insert."""
