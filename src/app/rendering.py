"""HTML 페이지 렌더링.

templates/ 아래 Jinja2 템플릿으로 공통 레이아웃, 목록 카드, 오류 화면을 만든다.
메타데이터는 autoescape로 이스케이프되고, XSLT 변환 결과만 |safe로 삽입한다.
"""

from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.catalog import CatalogEntry

_TEMPLATE_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

# 카드에서 비어 있는 필드를 대신할 표시값
_PLACEHOLDERS = {
    "title": "Untitled",
    "author": "Unknown",
    "manuscript": "—",
    "date": "—",
}


def _card(entry: CatalogEntry) -> dict:
    """목록 카드 하나에 필요한 값."""
    meta = entry.metadata.to_dict()
    for key, placeholder in _PLACEHOLDERS.items():
        meta[key] = meta[key] or placeholder
    return {"slug": entry.slug, **meta}


def render_catalog(
    entries: Iterable[CatalogEntry],
    site_title: str,
    query: str = "",
    page_title: str | None = None,
) -> str:
    """목록(또는 검색 결과) 페이지."""
    template = _env.get_template("catalog.html")
    return template.render(
        site_title=site_title,
        page_title=page_title or site_title,
        query=query,
        cards=[_card(e) for e in entries],
    )


def render_manuscript(entry: CatalogEntry, body_html: str, site_title: str) -> str:
    """변환된 필사본 한 건의 페이지."""
    template = _env.get_template("manuscript.html")
    return template.render(
        site_title=site_title,
        page_title=f"{entry.metadata.title or _PLACEHOLDERS['title']} — {site_title}",
        body_html=body_html,
    )


def render_error(heading: str, message: str, site_title: str, page_title: str) -> str:
    """404/500 오류 페이지."""
    template = _env.get_template("error.html")
    return template.render(
        site_title=site_title,
        page_title=page_title,
        heading=heading,
        message=message,
    )
