# region Docstring
"""
clipservices.text_replacer
Regex search/replace over copied text driven by a compact "search:replace" spec.
Overview:
- A replacement spec is a list of pairs such as "foo:bar,colou?r:color". Each search
    side is a regular expression applied globally, in the order given.
Contents:
- Functions:
    - parse_replacements(spec, pair_separator, value_separator) -> list[ReplacementPair]
    - apply_replacements(text, pairs) -> str
    - replace_text(text, spec, pair_separator, value_separator) -> str
Design Notes:
- Surrounding whitespace is trimmed from both sides of a pair. Pairs with an empty side
    are skipped, so a spec cannot replace text with nothing.
- Only the first two fields of a pair are used ("a:b:c" replaces "a" with "b").
- Replacement strings follow re.sub semantics (\\1 and \\g<name> back-references).
"""
# endregion
# region Imports
import re
from typing import Iterable

from clipcore.errors import ReplacementError
from clipcore.models.transforms import ReplacementPair


# endregion
# region Functions
def parse_replacements(
    spec: str, pair_separator: str = ",", value_separator: str = ":"
) -> list[ReplacementPair]:
    """
    Parse a replacement spec into ordered pairs.

    Args:
        spec (str): The spec, e.g. "foo:bar,baz:qux".
        pair_separator (str): Separator between pairs.
        value_separator (str): Separator between search and replacement.

    Returns:
        list[ReplacementPair]: The valid pairs, in spec order.

    Raises:
        ReplacementError: The spec is empty or contains no valid pair.

    Example:
        >>> parse_replacements("foo:bar, baz : qux")
        [ReplacementPair(search='foo', replace='bar'), ReplacementPair(search='baz', replace='qux')]
    """
    if not isinstance(spec, str) or not spec:
        raise ReplacementError("Replacements must be provided as a string")

    pairs: list[ReplacementPair] = []
    for chunk in spec.split(pair_separator):
        parts = chunk.split(value_separator)
        if len(parts) < 2:
            continue
        search, replace = parts[0].strip(), parts[1].strip()
        if search and replace:
            pairs.append(ReplacementPair(search=search, replace=replace))

    if not pairs:
        raise ReplacementError(f"No valid replacement pairs found in {spec!r}")
    return pairs


def apply_replacements(text: str, pairs: Iterable[ReplacementPair]) -> str:
    """
    Apply each pair to text as a global regex substitution, in order.

    Raises:
        ReplacementError: text is not a string or a pattern is not a valid regex.
    """
    if not isinstance(text, str):
        raise ReplacementError("Data must be a string")

    modified = text
    for pair in pairs:
        try:
            modified = re.sub(pair.search, pair.replace, modified)
        except re.error as e:
            raise ReplacementError(
                f"Invalid replacement {pair.search!r} -> {pair.replace!r}: {e}"
            ) from e
    return modified


def replace_text(
    text: str, spec: str, pair_separator: str = ",", value_separator: str = ":"
) -> str:
    """Parse spec and apply it to text. See parse_replacements and apply_replacements."""
    if not isinstance(text, str):
        raise ReplacementError("Data must be a string")
    pairs = parse_replacements(spec, pair_separator, value_separator)
    return apply_replacements(text, pairs)


# endregion
__all__ = ["parse_replacements", "apply_replacements", "replace_text"]
