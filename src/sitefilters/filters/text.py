"""
Text Filters

Word-capitalization filter exposed to templates under the names in
TITLE_CASE_FILTER_NAMES.
"""

from typing import Tuple

TITLE_CASE_FILTER_NAMES: Tuple[str, ...] = ("TitleCase", "Titlecase")


def title_case(text: str) -> str:
    """Capitalize each word of the input.

    Words are maximal runs of non-whitespace; each one gets its first
    character uppercased and the rest lowercased, and the words are joined
    with a single space. Whitespace-only input yields an empty string.

    The first character goes through str.capitalize, which uses Unicode
    titlecase mapping: 'ǆ' becomes 'ǅ' and 'ß' becomes 'Ss'.

    Args:
        text: Text to transform

    Returns:
        Title-cased text
    """
    return " ".join(word.capitalize() for word in text.split())
