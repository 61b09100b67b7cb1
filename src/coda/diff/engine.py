"""Line-level diff via longest common subsequence.

The edit script is minimal: it has the fewest possible Added plus Removed
entries. Replaying Context+Removed entries gives back the old lines and
replaying Context+Added entries gives back the new lines.

Lines are split on line feed only. A carriage return is an ordinary
character of the line, so CRLF content diffs like any other text and is
written back unchanged.
"""

from collections.abc import Iterable, Sequence

from coda.diff.types import LineEntry, LineKind


def split_lines(content: str) -> list[str]:
    """Split text on ``\\n``. Empty text has no lines.

    A trailing newline yields a final empty line, so ``"\\n".join`` restores
    the original text exactly.
    """
    if not content:
        return []
    return content.split("\n")


def join_lines(lines: Iterable[str]) -> str:
    return "\n".join(lines)


def old_side(entries: Iterable[LineEntry]) -> list[str]:
    """Lines of the old content, replayed from an edit script."""
    return [e.text for e in entries if e.kind is not LineKind.ADDED]


def new_side(entries: Iterable[LineEntry]) -> list[str]:
    """Lines of the new content, replayed from an edit script."""
    return [e.text for e in entries if e.kind is not LineKind.REMOVED]


def compute_edit_script(old_lines: Sequence[str], new_lines: Sequence[str]) -> list[LineEntry]:
    """Compute the shortest edit script turning ``old_lines`` into ``new_lines``.

    The common prefix and suffix are trimmed first; only the middle goes
    through the O(n*m) LCS table.

    Args:
        old_lines: Lines of the current content
        new_lines: Lines of the proposed content

    Returns:
        Entries in order, with 1-based line numbers on each side they belong to.
    """
    n, m = len(old_lines), len(new_lines)

    prefix = 0
    while prefix < n and prefix < m and old_lines[prefix] == new_lines[prefix]:
        prefix += 1

    suffix = 0
    while (
        suffix < n - prefix
        and suffix < m - prefix
        and old_lines[n - 1 - suffix] == new_lines[m - 1 - suffix]
    ):
        suffix += 1

    script = [
        LineEntry(LineKind.CONTEXT, old_lines[i], old_lineno=i + 1, new_lineno=i + 1)
        for i in range(prefix)
    ]
    script.extend(_diff_middle(old_lines, new_lines, prefix, n - suffix, prefix, m - suffix))
    for k in range(suffix):
        i = n - suffix + k
        j = m - suffix + k
        script.append(LineEntry(LineKind.CONTEXT, old_lines[i], old_lineno=i + 1, new_lineno=j + 1))
    return script


def diff_texts(old_content: str, new_content: str) -> list[LineEntry]:
    """Edit script between two texts."""
    return compute_edit_script(split_lines(old_content), split_lines(new_content))


def _diff_middle(
    old_lines: Sequence[str],
    new_lines: Sequence[str],
    old_lo: int,
    old_hi: int,
    new_lo: int,
    new_hi: int,
) -> list[LineEntry]:
    a = old_lines[old_lo:old_hi]
    b = new_lines[new_lo:new_hi]
    la, lb = len(a), len(b)

    def removed(i: int) -> LineEntry:
        return LineEntry(LineKind.REMOVED, a[i], old_lineno=old_lo + i + 1)

    def added(j: int) -> LineEntry:
        return LineEntry(LineKind.ADDED, b[j], new_lineno=new_lo + j + 1)

    if not la:
        return [added(j) for j in range(lb)]
    if not lb:
        return [removed(i) for i in range(la)]

    # table[i][j] = LCS length of a[i:] and b[j:]
    table = [[0] * (lb + 1) for _ in range(la + 1)]
    for i in range(la - 1, -1, -1):
        row = table[i]
        below = table[i + 1]
        ai = a[i]
        for j in range(lb - 1, -1, -1):
            if ai == b[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = below[j] if below[j] >= row[j + 1] else row[j + 1]

    out: list[LineEntry] = []
    i = j = 0
    while i < la and j < lb:
        if a[i] == b[j]:
            out.append(
                LineEntry(
                    LineKind.CONTEXT,
                    a[i],
                    old_lineno=old_lo + i + 1,
                    new_lineno=new_lo + j + 1,
                )
            )
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            out.append(removed(i))
            i += 1
        else:
            out.append(added(j))
            j += 1
    out.extend(removed(k) for k in range(i, la))
    out.extend(added(k) for k in range(j, lb))
    return out
