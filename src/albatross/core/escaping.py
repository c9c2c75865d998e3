"""Reversible escaping of YAML-significant characters in comment bodies.

Comments are stored as plain scalar values while a document is in memory.
The characters below would be reinterpreted by the YAML engine (mapping
indicators, block scalars, sequence entries, and the whitespace that allows
line folding), so they are swapped for tokens before the comment is embedded
and restored after the serializer has written its own line syntax.

Bodies that already contain one of the tokens do not survive unescape.
"""

# Applied in this order by escape(); unescape() reverses each pair.
ESCAPE_TABLE: tuple[tuple[str, str], ...] = (
    (":", "_COLON_"),
    ("|", "_VERT_"),
    ("-", "_HYPHEN_"),
    (" ", "_SPACE_"),
)

RESERVED_TOKENS: frozenset[str] = frozenset(token for _, token in ESCAPE_TABLE)


def escape(text: str) -> str:
    """Replace YAML-significant characters in a comment body with tokens.

    Args:
        text: Raw comment body (without the leading ``#``).

    Returns:
        Escaped body that contains none of ``:``, ``|``, ``-`` or space.

    Example:
        >>> escape(" Port: 8080")
        '_SPACE_Port_COLON__SPACE_8080'

    """
    for char, token in ESCAPE_TABLE:
        text = text.replace(char, token)
    return text


def unescape(text: str) -> str:
    """Restore characters replaced by :func:`escape`.

    Args:
        text: Escaped comment body.

    Returns:
        Original comment body.

    """
    for char, token in ESCAPE_TABLE:
        text = text.replace(token, char)
    return text


def contains_reserved_token(text: str) -> bool:
    """Check whether text cannot round-trip through escape/unescape unchanged.

    True for text holding a literal token such as ``_COLON_``, and for text
    whose escaped form accidentally spells one (``"_SPACE "``).
    """
    return any(token in text for token in RESERVED_TOKENS) or unescape(escape(text)) != text
