"""SSML helpers.

Text is escaped exactly once, inside ``render_ssml``, immediately before it is
embedded in markup. Plain-text synthesis sends the raw turn text.
"""

# Ampersand must come first so entities produced below are not re-escaped.
_ENTITIES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

def escape_markup(text: str) -> str:
    """Replace the five markup-significant characters with entities.

    Not idempotent: escaping already escaped text double-escapes it.
    """
    for char, entity in _ENTITIES:
        text = text.replace(char, entity)
    return text

def render_ssml(text: str, rate: str = "medium") -> str:
    """Wrap raw turn text in a prosody-controlled SSML document."""
    return f'<speak><prosody rate="{rate}">{escape_markup(text)}</prosody></speak>'
