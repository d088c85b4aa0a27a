"""Split a variable value into its whitespace-separated parts."""

from itertools import groupby

from bytebraise.tree import TextRange


def split_var_value(s: str) -> list[TextRange]:
    """Ranges of the whitespace-separated parts of ``s``.

    Whitespace inside a ``${...}`` expression does not separate parts.
    """
    items = []
    depth = 0
    previous = None
    for position, char in enumerate(s):
        if char == "{" and previous == "$":
            depth += 1
        elif char == "}":
            depth = max(depth - 1, 0)
        previous = char
        items.append((position, char, depth))

    ranges = []
    for _, group in groupby(items, key=lambda item: item[1].isspace() and item[2] == 0):
        group = list(group)
        if all(char.isspace() for _, char, _ in group):
            continue
        ranges.append(TextRange(group[0][0], group[-1][0] + 1))
    return ranges