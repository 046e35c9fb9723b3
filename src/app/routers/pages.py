"""HTML 페이지 라우터.

GET /              → 전체 목록
GET /search?q=     → 검색 결과 (q가 비면 전체 목록)
GET /view/{slug}   → 필사본 한 건의 변환 결과
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from app._state import ViewerState, get_viewer, is_valid_slug
from app.rendering import render_catalog, render_error, render_manuscript

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def _not_found_page(viewer: ViewerState) -> HTMLResponse:
    html = render_error(
        heading="Manuscript Not Found",
        message="The requested manuscript could not be located in the archive.",
        site_title=viewer.site_title,
        page_title="404 — Manuscript Not Found",
    )
    return HTMLResponse(html, status_code=404)


@router.get("/", response_class=HTMLResponse)
async def index(viewer: ViewerState = Depends(get_viewer)):
    """전체 목록 페이지."""
    return render_catalog(viewer.catalog.get_all(), site_title=viewer.site_title)


@router.get("/search", response_class=HTMLResponse)
async def search(q: str = "", viewer: ViewerState = Depends(get_viewer)):
    """검색 결과 페이지. 검색어는 검색창에 그대로 다시 채워진다."""
    results = viewer.catalog.search(q)
    return render_catalog(
        results,
        site_title=viewer.site_title,
        query=q,
        page_title=f"Search — {viewer.site_title}",
    )


@router.get("/view/{slug}", response_class=HTMLResponse)
async def view(slug: str, viewer: ViewerState = Depends(get_viewer)):
    """필사본 한 건을 XSLT로 변환해 보여준다.

    목록에 없는 slug는 404, 변환 실패는 500 (오류 메시지를 화면에 표시).
    """
    if not is_valid_slug(slug):
        return _not_found_page(viewer)

    entry = viewer.catalog.find_by_slug(slug)
    if entry is None:
        return _not_found_page(viewer)

    result = viewer.transformer.try_transform(entry.path)
    if result.error_kind == "not_found":
        # 목록 스캔 이후 파일이 지워진 경우
        return _not_found_page(viewer)
    if not result.ok:
        logger.error(f"변환 실패: {slug} ({result.error_kind}): {result.message}")
        html = render_error(
            heading="Transformation Error",
            message=result.message,
            site_title=viewer.site_title,
            page_title="Error",
        )
        return HTMLResponse(html, status_code=500)

    return render_manuscript(entry, result.html, site_title=viewer.site_title)
