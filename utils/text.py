"""Text normalization shared by fusion, classification and selection.

Adapter names are identity keys compared case-insensitively; descriptive
text is normalized before keyword matching.
"""

# Unicode dash variants unified to ASCII hyphen before matching
_DASH_TRANSLATION = str.maketrans(
    {
        "\u2010": "-",  # hyphen
        "\u2011": "-",  # non-breaking hyphen
        "\u2012": "-",  # figure dash
        "\u2013": "-",  # en dash
        "\u2014": "-",  # em dash
        "\u2015": "-",  # horizontal bar
        "\u2212": "-",  # minus sign
    }
)


def normalize_for_match(*parts: str | None) -> str:
    """Normalize text fragments for keyword matching.

    Each fragment is case-folded, has dash variants unified to "-" and all
    whitespace removed. Fragments are joined with "|" so keywords never
    match across field boundaries.

    Examples:
        "Intel(R) Wi\u2011Fi 6 AX201" -> "intel(r)wi-fi6ax201"
        ("Ethernet", None, "Realtek") -> "ethernet|realtek"

    Args:
        *parts: Text fragments (None entries are skipped)

    Returns:
        Normalized text.
    """
    normalized = []
    for part in parts:
        if not part:
            continue
        text = "".join(part.casefold().translate(_DASH_TRANSLATION).split())
        if text:
            normalized.append(text)
    return "|".join(normalized)


def name_key(name: str) -> str:
    """Case-insensitive identity key for an adapter name."""
    return name.casefold()


def names_equal(left: str, right: str) -> bool:
    """Compare two adapter names case-insensitively."""
    return name_key(left) == name_key(right)
