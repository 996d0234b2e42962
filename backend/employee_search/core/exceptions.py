"""
Exceptions raised by the query-by-example layer.
"""


class QueryByExampleError(Exception):
    """
    Base exception for example-query failures.

    The API maps IncorrectResultSizeError to 409; other subclasses are
    left to the framework and surface as 500.
    """
    pass


class InvalidExampleError(QueryByExampleError):
    """
    Raised when an example cannot be turned into criteria: a missing probe,
    a probe that is not a mapped model of the repository's type, or a
    matcher naming a property the model does not have.
    """
    pass


class UnsupportedMatcherError(QueryByExampleError):
    """Raised when a string matcher cannot be translated to SQL"""
    pass


class IncorrectResultSizeError(QueryByExampleError):
    """
    Raised when a single-result query matches a different number of rows.

    Attributes:
        expected_size: Number of rows the caller expected
        actual_size: Number of rows that matched
    """

    def __init__(self, expected_size: int, actual_size: int):
        self.expected_size = expected_size
        self.actual_size = actual_size
        super().__init__(
            f"Incorrect result size: expected {expected_size}, actual {actual_size}"
        )
