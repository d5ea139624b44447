"""
Custom exception classes for the recipe parser
"""


class CookparseError(Exception):
    """Base exception for cookparse"""
    pass


class GrammarError(CookparseError):
    """Raised when the token scanner meets a grammar form it has no constructor for"""
    def __init__(self, form: str):
        self.form = form
        super().__init__(f"Unknown grammar form: '{form}'")


class SourceTooLargeError(CookparseError):
    """Raised when a recipe source exceeds the configured size limit"""
    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"Recipe source is {length} characters, limit is {limit}")
