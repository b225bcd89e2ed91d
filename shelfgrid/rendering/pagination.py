"""Pagination links for a rendered table.

Links are built from a URL template holding the ``%#%`` page
placeholder. The template is also exposed on the container so the
client can substitute page numbers itself after an AJAX refresh.
"""

from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from markupsafe import Markup

from . import labels
from .urls import safe_url

PAGE_PLACEHOLDER = "%#%"
PAGE_PARAM = "paged"
END_SIZE = 1
MID_SIZE = 2


def resolve_current_page(runtime_page: Optional[int], ambient_page: Optional[int] = None) -> int:
    """An explicit runtime page (AJAX) wins over the ambient page (navigation)."""
    for page in (runtime_page, ambient_page):
        if page is not None and page > 0:
            return page
    return 1


def resolve_base_url(page_url: Optional[str], ambient_url: Optional[str] = None) -> str:
    """Prefer the caller-supplied page URL.

    During AJAX the ambient URL is the API endpoint, not the page the
    table lives on, so the client sends the page URL explicitly.
    A caller URL with a scheme other than http or https is ignored.
    """
    return safe_url(page_url) or safe_url(ambient_url)


def link_template(base_url: str) -> str:
    """Base URL with its page parameter replaced by the placeholder."""
    parts = urlsplit(safe_url(base_url))
    query = [
        (k, v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
        if k != PAGE_PARAM
    ]
    encoded = urlencode(query)
    page_query = f"{PAGE_PARAM}={PAGE_PLACEHOLDER}"
    new_query = f"{encoded}&{page_query}" if encoded else page_query
    return urlunsplit((parts.scheme, parts.netloc, parts.path, new_query, ""))


def page_numbers(current: int, total: int) -> list[Optional[int]]:
    """Pages to show, with ``None`` marking an elided gap."""
    shown: list[Optional[int]] = []
    gap = False
    for n in range(1, total + 1):
        near_edge = n <= END_SIZE or n > total - END_SIZE
        near_current = current - MID_SIZE <= n <= current + MID_SIZE
        if near_edge or near_current:
            shown.append(n)
            gap = False
        elif not gap:
            shown.append(None)
            gap = True
    return shown


def render_pagination(current: int, total: int, base_url: str = "") -> Markup:
    """Render page links; nothing at all for a single page.

    Args:
        current: Page actually served.
        total: Total page count reported by the data source.
        base_url: URL of the page hosting the table.
    """
    if total <= 1:
        return Markup("")

    current = min(max(current, 1), total)
    template = link_template(base_url)

    def link(page: int, text, extra_class: str = "") -> Markup:
        return Markup(
            '<a class="page-numbers{cls}" href="{href}" data-page="{page}">{text}</a>'
        ).format(
            cls=f" {extra_class}" if extra_class else "",
            href=template.replace(PAGE_PLACEHOLDER, str(page)),
            page=page,
            text=text,
        )

    items = []
    if current > 1:
        items.append(link(current - 1, Markup(labels.PREVIOUS_PAGE), "prev"))
    for page in page_numbers(current, total):
        if page is None:
            items.append(Markup('<span class="page-numbers dots">&hellip;</span>'))
        elif page == current:
            items.append(
                Markup('<span aria-current="page" class="page-numbers current">{0}</span>').format(page)
            )
        else:
            items.append(link(page, page))
    if current < total:
        items.append(link(current + 1, Markup(labels.NEXT_PAGE), "next"))

    return Markup(
        '<nav class="shelfgrid-pagination" aria-label="Pagination" '
        'data-current-page="{current}" data-total-pages="{total}" '
        'data-link-template="{template}">{items}</nav>'
    ).format(
        current=current,
        total=total,
        template=template,
        items=Markup("").join(items),
    )
