"""
Line oriented reader for whitespace separated integer instance files.
"""

from typing import Iterable, List

import numpy as np

from ..errors import InstanceIOError, ParseError


class InstanceReader:
    """
    Reads header lines and integer matrices from an open text file.

    Attributes:
        path: File name used in error messages
        line_number: Number of lines consumed so far
    """

    def __init__(self, lines: Iterable[str], path: str = "<instance>"):
        self._lines = iter(lines)
        self.path = path
        self.line_number = 0

    def line(self) -> str:
        """
        Return the next raw line.

        Raises:
            InstanceIOError: At end of file
        """
        try:
            text = next(self._lines)
        except StopIteration:
            raise InstanceIOError(
                f"{self.path}: unexpected end of file after line {self.line_number}"
            ) from None
        self.line_number += 1
        return text

    def content_line(self) -> str:
        """Return the next line that is not blank."""
        text = self.line()
        while not text.strip():
            text = self.line()
        return text

    def integers(self, text: str) -> List[int]:
        """
        Parse every token of a line as an integer.

        Raises:
            ParseError: If a token is not an integer
        """
        values = []
        for token in text.split():
            try:
                values.append(int(token))
            except ValueError:
                raise ParseError(
                    f"{self.path}:{self.line_number}: cannot parse {token!r} as an integer"
                ) from None
        return values

    def size(self) -> int:
        """Read a line holding a single integer size."""
        text = self.content_line()
        values = self.integers(text)
        if len(values) != 1:
            raise ParseError(
                f"{self.path}:{self.line_number}: expected a single size, got {text.strip()!r}"
            )
        return values[0]

    def leading_integers(self, count: int) -> List[int]:
        """
        Read the next line and collect its first `count` integer tokens.

        Tokens that are not integers are skipped.

        Raises:
            InstanceIOError: If the line holds fewer integers
        """
        text = self.line()
        values = []
        for token in text.split():
            try:
                values.append(int(token))
            except ValueError:
                continue
            if len(values) == count:
                return values
        raise InstanceIOError(
            f"{self.path}:{self.line_number}: cannot find {count} sizes in {text.strip()!r}"
        )

    def matrix(self, n_rows: int, n_cols: int) -> np.ndarray:
        """
        Read an n_rows x n_cols integer matrix, one row per non blank line.

        Raises:
            ParseError: If a token is not an integer
            InstanceIOError: If a row has the wrong length or the file ends early
        """
        matrix = np.zeros((n_rows, n_cols), dtype=np.int64)
        for i in range(n_rows):
            row = self.integers(self.content_line())
            if len(row) != n_cols:
                raise InstanceIOError(
                    f"{self.path}:{self.line_number}: row has {len(row)} values, "
                    f"expected {n_cols}"
                )
            matrix[i] = row
        return matrix
