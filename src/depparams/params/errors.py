"""
Exceptions raised at the edges of dependency parameter validation.

Validation itself reports through Result objects; these exceptions exist for
callers that want a raising API, and for the one fatal condition (an
unreadable local exclusion file) that is not a validation error.
"""

from pathlib import Path
from typing import List, Union


class DependencyParamsError(Exception):
    """
    Raised when dependency options fail validation.

    Attributes:
        messages: Every validation error, in reporting order.
    """

    def __init__(self, messages: List[str]):
        self.messages = list(messages)
        super().__init__("\n".join(self.messages))


class LocalExcludeFileError(DependencyParamsError):
    """
    Raised when the local exclusion file cannot be opened or read.

    Attributes:
        path: The file that failed.
        cause: The underlying OS or decoding error.
    """

    def __init__(self, path: Union[str, Path], cause: Exception):
        self.path = str(path)
        self.cause = cause
        super().__init__([f"Cannot read local exclusion file {self.path}: {cause}"])
