"""라우터 공통 상태 및 헬퍼.

변환기(TeiTransformer)와 목록(ManuscriptCatalog)은 서버 시작 시 한 번 만들어
app.state.viewer에 넣고, 모든 라우터가 get_viewer()로 꺼내 쓴다.
요청마다 다시 만들지 않는다.
"""

import logging
import re
from dataclasses import dataclass

from fastapi import Request

from core.catalog import ManuscriptCatalog
from core.transformer import TeiTransformer
from core.viewer_config import ViewerConfig

logger = logging.getLogger(__name__)

# slug 패턴: 영문 소문자·숫자·하이픈·밑줄만 허용.
# 경로 탈출(../ 등)을 막기 위해 API 계층에서도 검증한다.
_SLUG_PATTERN = re.compile(r"^[a-z0-9_-]+$")


@dataclass(frozen=True)
class ViewerState:
    """요청 처리기들이 공유하는 읽기 전용 상태."""

    transformer: TeiTransformer
    catalog: ManuscriptCatalog
    site_title: str = "TEI Manuscript Viewer"


def build_state(config: ViewerConfig, warm: bool = True) -> ViewerState:
    """설정에서 변환기와 목록을 만든다.

    입력:
        config: ViewerConfig.
        warm: True이면 목록 스캔까지 미리 끝낸다 (동시 요청 전에 캐시 확정).
    출력: ViewerState.

    Raises:
        ConfigError: 스타일시트나 데이터 디렉토리가 잘못되었을 때.
    """
    transformer = TeiTransformer(config.xslt_path)
    catalog = ManuscriptCatalog(config.xml_dir, transformer)
    if warm:
        entries = catalog.get_all()
        logger.info(f"필사본 {len(entries)}건 로드: {config.xml_dir}")
    return ViewerState(
        transformer=transformer,
        catalog=catalog,
        site_title=config.site_title,
    )


def get_viewer(request: Request) -> ViewerState:
    """FastAPI 의존성: 현재 앱의 ViewerState를 반환한다."""
    return request.app.state.viewer


def is_valid_slug(slug: str) -> bool:
    """라우트에서 받는 slug 형식 검사."""
    return bool(_SLUG_PATTERN.match(slug))
