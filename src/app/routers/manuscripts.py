"""필사본 JSON API 라우터.

GET /api/manuscripts          → [{slug, metadata, url}, ...]
GET /api/manuscripts/{slug}   → {slug, metadata}, 없으면 404 {"error": ...}

JSON은 UTF-8, 유니코드 그대로(이스케이프 없음), 들여쓰기 출력이다.
"""

import json
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app._state import ViewerState, get_viewer, is_valid_slug

router = APIRouter(prefix="/api", tags=["manuscripts"])


# ── Pydantic 모델 (OpenAPI 문서용) ─────────────────

class MetadataModel(BaseModel):
    """필사본 메타데이터. 없는 필드는 빈 문자열."""
    title: str = ""
    subtitle: str = ""
    author: str = ""
    manuscript: str = ""
    repository: str = ""
    date: str = ""
    extent: str = ""
    description: str = ""


class ManuscriptItem(BaseModel):
    """목록 항목."""
    slug: str
    metadata: MetadataModel
    url: str


class ManuscriptDetail(BaseModel):
    """단건 조회 결과."""
    slug: str
    metadata: MetadataModel


class ErrorBody(BaseModel):
    error: str


class PrettyJSONResponse(JSONResponse):
    """사람이 읽기 쉬운 JSON 응답 (ensure_ascii=False, indent=4)."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=4).encode("utf-8")


def _not_found() -> JSONResponse:
    return PrettyJSONResponse({"error": "Manuscript not found"}, status_code=404)


@router.get("/manuscripts", response_model=list[ManuscriptItem])
async def api_manuscripts(viewer: ViewerState = Depends(get_viewer)):
    """전체 필사본 목록 (제목순)."""
    data = [
        {
            "slug": entry.slug,
            "metadata": entry.metadata.to_dict(),
            "url": f"/view/{entry.slug}",
        }
        for entry in viewer.catalog.get_all()
    ]
    return PrettyJSONResponse(data)


@router.get(
    "/manuscripts/{slug}",
    response_model=ManuscriptDetail,
    responses={404: {"model": ErrorBody}},
)
async def api_manuscript(slug: str, viewer: ViewerState = Depends(get_viewer)):
    """필사본 한 건의 메타데이터."""
    if not is_valid_slug(slug):
        return _not_found()

    entry = viewer.catalog.find_by_slug(slug)
    if entry is None:
        return _not_found()

    return PrettyJSONResponse({
        "slug": entry.slug,
        "metadata": entry.metadata.to_dict(),
    })
