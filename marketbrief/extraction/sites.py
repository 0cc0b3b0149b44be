"""Per-site HTML cleaners."""

import re
from typing import Iterable, Optional

from bs4 import BeautifulSoup, Comment, Tag

PARSER = "lxml"

NEWSPAPER_ARTICLE_CHROME = [
    "script",
    "style",
    "iframe",
    "link",
    "meta",
    "noscript",
    "img",
    "svg",
    "picture",
    ".ads",
    "#header",
    "#footer",
    ".nav",
    ".sidebar",
    ".comments",
    ".social-share",
    '[class*="advertisement"]',
    ".google-auto-placed",
    "#jg-newsletter-sign-up",
    ".autors-widget",
    'p:has(a[href*="mailto:"])',
]
NEWSPAPER_ARTICLE_BODY = [".body", ".article-content", '[class*="article-body"]']

ICINSIDER_CHROME = [
    "script",
    "style",
    "header",
    "nav",
    "#header",
    "#subnav",
    ".post-info",
    "link",
    "meta",
    ".elementor-widget-container hr",
]
ICINSIDER_BODY = [".elementor-widget-container", ".entry-content", ".post", "article"]

EXCHANGE_PAGE_CHROME = [
    "meta",
    "link",
    "script",
    "style",
    "nav",
    "search",
    ".elementor-search-form",
    ".elementor-widget-theme-site-logo",
    "header",
    "footer",
    ".elementor-location-footer",
]


def strip_elements(soup: BeautifulSoup, selectors: Iterable[str]) -> BeautifulSoup:
    """Remove every element matching any selector, plus HTML comments."""
    for selector in selectors:
        for element in soup.select(selector):
            element.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    return soup


def first_non_empty(soup: BeautifulSoup, selectors: Iterable[str]) -> Optional[Tag]:
    """First element, in selector priority order, that has visible text."""
    for selector in selectors:
        element = soup.select_one(selector)
        if element is not None and element.get_text(strip=True):
            return element
    return None


def _collapse_html(html: str) -> str:
    html = re.sub(r"\s+", " ", html)
    # Drop empty pairs such as <p> </p>
    html = re.sub(r"<([a-z0-9]+)[^>]*>\s*</\1>", "", html, flags=re.IGNORECASE)
    return html.strip()


def clean_newspaper_article(html: str) -> str:
    """Main body of a Gleaner or Observer article, as an HTML fragment."""
    soup = strip_elements(BeautifulSoup(html, PARSER), NEWSPAPER_ARTICLE_CHROME)
    body = first_non_empty(soup, NEWSPAPER_ARTICLE_BODY)
    if body is None:
        return ""
    return _collapse_html(body.decode_contents())


def clean_icinsider_article(html: str) -> str:
    """Plain text of an ICInsider article."""
    soup = strip_elements(BeautifulSoup(html, PARSER), ICINSIDER_CHROME)
    content = first_non_empty(soup, ICINSIDER_BODY)
    if content is None:
        return ""

    for element in content.select("p, div"):
        if not element.decomposed and not element.get_text(strip=True):
            element.decompose()

    return re.sub(r"\s+", " ", content.get_text(" ")).strip()


def clean_observer_homepage(html: str) -> str:
    """Keep only the business article cards of the Observer homepage."""
    soup = BeautifulSoup(html, PARSER)
    output = BeautifulSoup("", PARSER)
    container = output.new_tag("div", attrs={"class": "business-headlines"})
    output.append(container)

    for article in soup.select("article"):
        category = article.select_one(".categories")
        if category is None or "Business" not in category.get_text():
            continue

        card = output.new_tag("div", attrs={"class": "article"})
        title_link = article.select_one(".title a")

        if title_link is not None and title_link.get_text(strip=True):
            heading = output.new_tag("h2")
            heading.string = title_link.get_text(strip=True)
            card.append(heading)

        for selector, css_class in ((".author", "author"), (".date_part", "date"), (".body", "preview")):
            element = article.select_one(selector)
            if element is not None and element.get_text(strip=True):
                paragraph = output.new_tag("p", attrs={"class": css_class})
                paragraph.string = element.get_text(strip=True)
                card.append(paragraph)

        if title_link is not None and title_link.get("href"):
            link = output.new_tag("a", href=title_link["href"], attrs={"class": "article-link"})
            link.string = "Read more"
            card.append(link)

        container.append(card)

    return container.decode_contents()


def clean_jamstockex_page(html: str) -> str:
    """Stock exchange listing page without site chrome."""
    soup = strip_elements(BeautifulSoup(html, PARSER), EXCHANGE_PAGE_CHROME)
    lines = (line for line in str(soup).splitlines() if line.strip())
    return "\n".join(lines)
