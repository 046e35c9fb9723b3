"""뷰어 설정 관리.

설정 우선순위: 명시적 인자(CLI 옵션) → 환경변수 → .env 파일 → 기본값.

설정 항목:
    TEI_XML_DIR    : TEI/XML 필사본 디렉토리 (기본: examples/library/xml)
    TEI_XSLT_PATH  : XSLT 스타일시트 경로 (기본: 패키지에 포함된 tei-to-html.xsl)
    TEI_SITE_TITLE : 페이지 머리말에 표시할 사이트 이름
"""

import os
from pathlib import Path
from typing import Optional

# src/core/viewer_config.py → 프로젝트 루트
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

BUNDLED_XSLT = Path(__file__).resolve().parent / "xslt" / "tei-to-html.xsl"


class ViewerConfig:
    """뷰어 설정.

    사용법:
        config = ViewerConfig()
        config = ViewerConfig(xml_dir="./manuscripts")  # CLI 옵션으로 덮어쓰기
        xml_dir = config.xml_dir
    """

    DEFAULTS = {
        "tei_xml_dir": str(_PROJECT_ROOT / "examples" / "library" / "xml"),
        "tei_xslt_path": str(BUNDLED_XSLT),
        "tei_site_title": "TEI Manuscript Viewer",
    }

    def __init__(
        self,
        xml_dir: Optional[str | Path] = None,
        xslt_path: Optional[str | Path] = None,
        env_file: Optional[Path] = None,
    ):
        self._overrides: dict = {}
        if xml_dir is not None:
            self._overrides["tei_xml_dir"] = str(xml_dir)
        if xslt_path is not None:
            self._overrides["tei_xslt_path"] = str(xslt_path)

        # .env 파일: 지정된 파일이 있으면 그것만, 없으면 프로젝트 루트의 .env
        env_path = env_file if env_file is not None else _PROJECT_ROOT / ".env"
        self._env_cache: dict = _read_env_file(env_path) if env_path.exists() else {}

    def get(self, key: str, default=None):
        """설정값 조회. 명시적 인자 → 환경변수(대문자) → .env → DEFAULTS → default."""
        if key in self._overrides:
            return self._overrides[key]
        env_key = key.upper()
        val = os.environ.get(env_key) or self._env_cache.get(env_key)
        if val is not None:
            return val
        return self.DEFAULTS.get(key, default)

    @property
    def xml_dir(self) -> Path:
        return Path(self.get("tei_xml_dir")).expanduser()

    @property
    def xslt_path(self) -> Path:
        return Path(self.get("tei_xslt_path")).expanduser()

    @property
    def site_title(self) -> str:
        return self.get("tei_site_title")


def _read_env_file(path: Path) -> dict:
    """.env 파일에서 KEY=VALUE 줄만 읽는다 (python-dotenv 없이).

    `export ` 접두어를 허용한다. 값 양끝의 같은 따옴표 한 쌍은 벗기고,
    따옴표 없는 값은 ` #` 뒤를 주석으로 버린다.
    """
    settings = {}
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        name, sep, value = line.partition("=")
        name = name.strip()
        if not sep or not name or name.startswith("#"):
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        else:
            value = value.split(" #", 1)[0].rstrip()
        settings[name] = value
    return settings
