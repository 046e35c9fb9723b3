"""웹 앱 서버.

FastAPI 기반. TEI 필사본 목록·검색·변환 페이지와 JSON API를 제공하고
정적 파일(CSS/JS)을 /assets 아래에서 서빙한다.

엔드포인트:
    GET /                         → 목록 페이지
    GET /search?q=                → 검색 결과 페이지
    GET /view/{slug}              → 필사본 변환 페이지
    GET /api/manuscripts          → 필사본 목록 JSON
    GET /api/manuscripts/{slug}   → 필사본 메타데이터 JSON
"""

import sys
from pathlib import Path

# src/ 디렉토리를 Python 경로에 추가
_src_dir = str(Path(__file__).resolve().parent.parent)
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from fastapi import FastAPI  # noqa: E402
from fastapi.staticfiles import StaticFiles  # noqa: E402

from app._state import ViewerState, build_state  # noqa: E402
from app.routers import manuscripts, pages  # noqa: E402
from core.viewer_config import ViewerConfig  # noqa: E402

# 정적 파일 디렉토리
_static_dir = Path(__file__).parent / "static"


def create_app(state: ViewerState) -> FastAPI:
    """ViewerState를 받아 FastAPI 앱을 만든다.

    상태는 앱 생성 시점에 이미 완성되어 있어야 한다.
    요청 처리 중에는 읽기만 한다.
    """
    app = FastAPI(
        title=state.site_title,
        description="TEI/XML 필사본을 XSLT로 변환해 보여주는 뷰어",
        version="0.1.0",
    )
    app.state.viewer = state

    app.include_router(manuscripts.router)
    app.include_router(pages.router)
    app.mount("/assets", StaticFiles(directory=str(_static_dir)), name="assets")

    return app


def configure(
    xml_dir: str | Path | None = None,
    xslt_path: str | Path | None = None,
) -> FastAPI:
    """설정(환경변수·.env·인자)에서 상태를 만들고 앱을 반환한다.

    Raises:
        ConfigError: 스타일시트나 데이터 디렉토리가 잘못되었을 때.
    """
    config = ViewerConfig(xml_dir=xml_dir, xslt_path=xslt_path)
    return create_app(build_state(config))
