from statcards.cards.themes import Theme

FONT_FAMILY = "'Segoe UI', Ubuntu, Sans-Serif"


def escape_xml(text: object) -> str:
    """Sanitize text for SVG output."""

    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def format_number(value: int) -> str:
    """Shorten large counts: 1234 -> 1.2k, 1234567 -> 1.2M."""

    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}k"
    return str(value)


def render_border(width: int, height: int, theme: Theme, hide_border: bool) -> str:
    if hide_border:
        return ""
    return (
        f'<rect x="0.5" y="0.5" rx="4.5" ry="4.5" width="{width - 1}" '
        f'height="{height - 1}" fill="none" stroke="{theme.border}"/>'
    )


def render_card(width: int, height: int, theme: Theme, style: str, body: str) -> str:
    """Wrap card content in the root SVG element with background and styles."""

    return f"""
<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg">
  <style>
{style}
  </style>
  <rect x="0" y="0" rx="4.5" ry="4.5" width="{width}" height="{height}" fill="{theme.background}"/>
  {body}
</svg>
""".strip()


def render_error_card(message: str) -> str:
    """Standardized error card."""

    return f"""
<svg width="400" height="100" viewBox="0 0 400 100" xmlns="http://www.w3.org/2000/svg">
  <rect x="0" y="0" width="400" height="100" rx="4.5" fill="#0d1117"/>
  <rect x="0.5" y="0.5" width="399" height="99" rx="4.5" fill="none" stroke="#f85149"/>
  <text x="200" y="40" text-anchor="middle" fill="#f85149" font-family="{FONT_FAMILY}" font-size="14" font-weight="600">Error</text>
  <text x="200" y="65" text-anchor="middle" fill="#c9d1d9" font-family="{FONT_FAMILY}" font-size="12">{escape_xml(message)}</text>
</svg>
""".strip()
