"""Line sanitizer — strips comments while tracking quoted literals.

The sanitizer works on one raw line at a time.  Block-comment state is
the only thing carried into the next line; single/double quote state is
line-local and resets on every call, so a string literal continued with
a trailing backslash is misread from the next line onward.
"""

from __future__ import annotations

from dataclasses import dataclass

BLOCK_OPEN = "/*"
BLOCK_CLOSE = "*/"
LINE_COMMENT = "//"


@dataclass(frozen=True, slots=True)
class SanitizedLine:
    """Result of sanitizing one raw line."""

    text: str
    in_comment: bool
    line_comment_column: int | None = None  # 1-based column of an unquoted "//"

    @property
    def has_line_comment(self) -> bool:
        return self.line_comment_column is not None


def sanitize_line(raw: str, in_comment: bool = False) -> SanitizedLine:
    """Remove comments from *raw*, keeping code and literal contents.

    *in_comment* is the block-comment flag carried over from the
    previous line.  The returned ``SanitizedLine.in_comment`` is the flag
    to carry into the next one.

    Never raises: unbalanced quotes, unterminated comments and a
    backslash as the very last character are all tolerated.
    """
    out: list[str] = []
    in_dquote = False
    in_squote = False
    n = len(raw)
    i = 0

    while i < n:
        if in_comment:
            close = raw.find(BLOCK_CLOSE, i)
            if close < 0:
                break
            in_comment = False
            i = close + len(BLOCK_CLOSE)
            continue

        ch = raw[i]
        nxt = raw[i + 1] if i + 1 < n else ""
        quoted = in_dquote or in_squote

        if not quoted and ch == "/" and nxt == "*":
            in_comment = True
            i += len(BLOCK_OPEN)
            continue

        if not quoted and ch == "/" and nxt == "/":
            # Everything from here on is comment text.
            return SanitizedLine("".join(out), in_comment, i + 1)

        if quoted and ch == "\\" and nxt:
            # Escape pair: copied verbatim, quote state untouched.
            out.append(ch)
            out.append(nxt)
            i += 2
            continue

        if ch == '"' and not in_squote:
            in_dquote = not in_dquote
        elif ch == "'" and not in_dquote:
            in_squote = not in_squote

        out.append(ch)
        i += 1

    return SanitizedLine("".join(out), in_comment)


def blank_literals(text: str) -> str:
    """Replace the contents of string and character literals with spaces.

    Quote characters stay in place so columns are preserved.  Used by
    checkers that match code tokens and must not look inside literals.
    """
    out: list[str] = []
    quote = ""
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if quote:
            if ch == "\\" and i + 1 < n:
                out.append("  ")
                i += 2
                continue
            if ch == quote:
                quote = ""
                out.append(ch)
            else:
                out.append(" ")
        else:
            if ch in "\"'":
                quote = ch
            out.append(ch)
        i += 1
    return "".join(out)


def first_non_blank(text: str) -> int:
    """Return the index of the first non-whitespace character (len if none)."""
    return len(text) - len(text.lstrip())
