"""
Pushback-capable input cursor

Wraps a character source and keeps an ordered pushback buffer: characters
returned with push_back() are replayed, last pushed first, before the
underlying source resumes. Any number of characters can be pushed back,
so a reader can undo a multi-character tentative parse (e.g. "e+" of an
abandoned float exponent) and the stream is restored exactly.

Example:
    >>> cursor = InputCursor("ab")
    >>> first, second = cursor.next(), cursor.next()
    >>> cursor.push_back(second)
    >>> cursor.push_back(first)
    >>> cursor.next() + cursor.next()
    'ab'
"""

from typing import List, Optional, TextIO, Union


class InputCursor:
    """
    Character cursor over a string or a text stream

    A cursor is owned by one scan at a time; independent scans need
    independent cursors. Keep the same cursor across consecutive scan()
    calls so characters pushed back by one call are seen by the next.
    """

    def __init__(self, source: Union[str, TextIO] = "") -> None:
        """
        Initialize cursor over a source

        Args:
            source: A str, or any object with read(1) returning '' at end
                    (io.StringIO, sys.stdin, an open text file)

        Attributes:
            pending: Pushback buffer, top of stack at the end of the list
            offset: Characters logically consumed so far
        """
        self.source = source
        self.position = 0
        self.pending: List[str] = []
        self.offset = 0

    def next(self) -> Optional[str]:
        """
        Consume one character

        Returns:
            The next character, or None at end of input
        """
        if self.pending:
            c: Optional[str] = self.pending.pop()
        else:
            c = self.source_read()
        if c is not None:
            self.offset += 1
        return c

    def push_back(self, c: str) -> None:
        """
        Return one character to the front of the pending input

        May be called repeatedly; the last character pushed back is the
        first one returned by next().
        """
        self.pending.append(c)
        self.offset -= 1

    def peek(self) -> Optional[str]:
        """Look at the next character without consuming it"""
        c = self.next()
        if c is not None:
            self.push_back(c)
        return c

    def at_end(self) -> bool:
        """True if no character remains"""
        return self.peek() is None

    def source_read(self) -> Optional[str]:
        """Read one character from the underlying source"""
        if isinstance(self.source, str):
            if self.position >= len(self.source):
                return None
            c = self.source[self.position]
            self.position += 1
            return c

        c = self.source.read(1)
        return c if c else None
