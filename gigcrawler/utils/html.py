"""
HTML helpers for listing descriptions.

Descriptions are persisted as raw HTML fragments; these helpers drop
non-content nodes before storage and produce short plain-text previews
for logging.
"""

from bs4 import BeautifulSoup, Comment

_STRIP_TAGS = ("script", "style", "noscript", "template")


def clean_description_html(html: str) -> str:
    """
    Remove scripts, styles and comments from a description fragment.

    Args:
        html: innerHTML of the description container

    Returns:
        Cleaned HTML fragment (markup otherwise preserved)

    Examples:
        >>> clean_description_html("<p>Hi</p><script>x()</script>")
        '<p>Hi</p>'
    """
    if not html or not html.strip():
        return ""

    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(_STRIP_TAGS):
        tag.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    return str(soup).strip()


def html_to_text(html: str, limit: int | None = None) -> str:
    """
    Flatten an HTML fragment to single-spaced text.

    Examples:
        >>> html_to_text("<p>Hello<br>world</p>")
        'Hello world'
        >>> html_to_text("<p>abcdef</p>", limit=3)
        'abc...'
    """
    text = " ".join(BeautifulSoup(html or "", "html.parser").get_text(" ").split())
    if limit is not None and len(text) > limit:
        return f"{text[:limit]}..."
    return text
