"""TEI/XML → HTML 변환기.

TEI P5로 인코딩된 필사본 XML을 XSLT 스타일시트로 HTML 조각으로 변환하고,
목록용 서지 메타데이터를 XPath로 추출한다.

처리 흐름:
    1. XSLT 스타일시트를 생성 시점에 한 번 컴파일 (프로세스 수명 동안 재사용)
    2. transform(): 문서 파싱 → 스타일시트 적용 → HTML 문자열
    3. extract_metadata(): 문서를 따로 파싱 → 고정 XPath 질의 → ManuscriptMetadata

extract_metadata()는 스타일시트를 거치지 않고 필요한 필드만 질의한다.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from lxml import etree

logger = logging.getLogger(__name__)

TEI_NS = "http://www.tei-c.org/ns/1.0"
_NAMESPACES = {"tei": TEI_NS}

# 메타데이터 필드 → XPath. 순서가 곧 to_dict()의 키 순서다.
# author는 이름/성 두 질의를 합쳐 만들므로 별도 처리한다.
_FIELD_QUERIES = {
    "title": '//tei:titleStmt/tei:title[@type="main"]',
    "subtitle": '//tei:titleStmt/tei:title[@type="sub"]',
    "manuscript": "//tei:msIdentifier/tei:idno",
    "repository": "//tei:msIdentifier/tei:repository",
    "date": "//tei:origDate",
    "extent": "//tei:extent",
    "description": "//tei:msContents/tei:msItem/tei:note",
}
_FORENAME_QUERY = "//tei:titleStmt/tei:author/tei:persName/tei:forename"
_SURNAME_QUERY = "//tei:titleStmt/tei:author/tei:persName/tei:surname"


# ─── 에러 ──────────────────────────────────────────────

class TransformerError(Exception):
    """변환기 관련 에러의 공통 부모."""
    pass


class ConfigError(TransformerError):
    """시작 시점 설정 오류 (스타일시트·데이터 디렉토리 경로가 잘못됨)."""
    pass


class DocumentNotFound(TransformerError):
    """요청한 XML 파일이 디스크에 없음."""
    pass


class ParseError(TransformerError):
    """XML 문서를 파싱할 수 없음."""
    pass


class TransformError(TransformerError):
    """스타일시트 적용 실패."""
    pass


# ─── 결과 데이터 모델 ──────────────────────────────────

@dataclass(frozen=True)
class ManuscriptMetadata:
    """필사본 한 건의 서지 메타데이터.

    모든 필드는 문자열이며, 문서에 해당 요소가 없으면 빈 문자열이다.
    필수 필드는 없다.
    """

    title: str = ""
    subtitle: str = ""
    author: str = ""
    manuscript: str = ""      # 청구기호 (msIdentifier/idno)
    repository: str = ""      # 소장처
    date: str = ""
    extent: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        """JSON 응답용 딕셔너리. 키 순서는 필드 선언 순서."""
        return asdict(self)


@dataclass(frozen=True)
class TransformResult:
    """try_transform()의 결과.

    ok=True이면 html에 결과가 있고, 아니면 error_kind에 실패 종류가 들어간다.
    error_kind: "not_found" | "parse" | "transform"
    """

    ok: bool
    html: str = ""
    error_kind: Optional[str] = None
    message: str = ""


_ERROR_KINDS = {
    DocumentNotFound: "not_found",
    ParseError: "parse",
    TransformError: "transform",
}


# ─── 변환기 ────────────────────────────────────────────

class TeiTransformer:
    """TEI 문서 변환기.

    사용법:
        transformer = TeiTransformer("src/core/xslt/tei-to-html.xsl")
        html = transformer.transform("examples/library/xml/ruskin-diary.xml")
        meta = transformer.extract_metadata("examples/library/xml/ruskin-diary.xml")

    스타일시트는 생성자에서 컴파일한다. 경로가 없거나 스타일시트가 깨져 있으면
    요청마다 실패하지 않고 생성 시점에 ConfigError로 바로 실패한다.
    """

    def __init__(self, xslt_path: str | Path):
        self._xslt_path = Path(xslt_path)
        if not self._xslt_path.is_file():
            raise ConfigError(
                f"XSLT 스타일시트를 찾을 수 없습니다: {self._xslt_path}\n"
                "→ 해결: --xslt 옵션 또는 TEI_XSLT_PATH 환경변수를 확인하세요."
            )
        self._stylesheet: Optional[etree.XSLT] = None
        self._get_stylesheet()

    @property
    def xslt_path(self) -> Path:
        return self._xslt_path

    def _get_stylesheet(self) -> etree.XSLT:
        """컴파일된 스타일시트를 반환한다 (최초 1회만 컴파일)."""
        if self._stylesheet is None:
            try:
                xslt_doc = etree.parse(str(self._xslt_path), _make_parser())
                self._stylesheet = etree.XSLT(xslt_doc)
            except (etree.XMLSyntaxError, etree.XSLTParseError) as e:
                raise ConfigError(
                    f"XSLT 스타일시트를 읽을 수 없습니다: {self._xslt_path}: {e}"
                ) from e
            logger.debug(f"XSLT 스타일시트 로드: {self._xslt_path}")
        return self._stylesheet

    def transform(self, document_path: str | Path) -> str:
        """TEI XML 파일을 HTML 문자열로 변환한다.

        입력: document_path: TEI XML 파일 경로.
        출력: 변환된 HTML 조각 (문자열).

        Raises:
            DocumentNotFound: 파일이 없을 때.
            ParseError: XML 파싱 실패.
            TransformError: 스타일시트 적용 실패, 또는 결과가 비었을 때.
        """
        path = Path(document_path)
        doc = _load_document(path)

        try:
            result = self._get_stylesheet()(doc)
        except etree.XSLTApplyError as e:
            raise TransformError(f"XSLT 변환에 실패했습니다: {path.name}: {e}") from e

        if result.getroot() is None:
            raise TransformError(f"XSLT 변환 결과가 비어 있습니다: {path.name}")

        return str(result)

    def try_transform(self, document_path: str | Path) -> TransformResult:
        """transform()의 결과를 예외 대신 TransformResult로 돌려준다.

        호출자가 "문서 없음"과 "문서 깨짐"을 error_kind로 구분할 수 있다.
        """
        try:
            return TransformResult(ok=True, html=self.transform(document_path))
        except (DocumentNotFound, ParseError, TransformError) as e:
            return TransformResult(
                ok=False,
                error_kind=_ERROR_KINDS[type(e)],
                message=str(e),
            )

    def extract_metadata(self, document_path: str | Path) -> ManuscriptMetadata:
        """전체 변환 없이 서지 메타데이터만 추출한다.

        입력: document_path: TEI XML 파일 경로.
        출력: ManuscriptMetadata. 질의 결과가 없는 필드는 빈 문자열.

        Raises:
            DocumentNotFound: 파일이 없을 때.
            ParseError: XML 파싱 실패. 목록 작성 시 호출자가 잡아서 건너뛴다.
        """
        doc = _load_document(Path(document_path))

        values = {name: _xpath_value(doc, query) for name, query in _FIELD_QUERIES.items()}
        forename = _xpath_value(doc, _FORENAME_QUERY)
        surname = _xpath_value(doc, _SURNAME_QUERY)
        values["author"] = f"{forename} {surname}".strip()

        return ManuscriptMetadata(**values)


# ─── 헬퍼 ──────────────────────────────────────────────

def _make_parser() -> etree.XMLParser:
    """XML 파서. 문서 내부 DTD의 엔티티만 풀고, 외부 엔티티·네트워크는 읽지 않는다."""
    return etree.XMLParser(resolve_entities="internal", no_network=True)


def _load_document(path: Path) -> etree._ElementTree:
    """XML 파일을 파싱한다. transform/extract_metadata가 각자 호출한다."""
    if not path.is_file():
        raise DocumentNotFound(f"XML 파일을 찾을 수 없습니다: {path}")
    try:
        return etree.parse(str(path), _make_parser())
    except etree.XMLSyntaxError as e:
        logger.debug(f"XML 파싱 실패: {path.name}: {e}")
        raise ParseError(f"XML 파일을 파싱할 수 없습니다: {path.name}: {e}") from e
    except OSError as e:
        raise ParseError(f"XML 파일을 읽을 수 없습니다: {path.name}: {e}") from e


def _xpath_value(doc: etree._ElementTree, query: str) -> str:
    """XPath 질의의 첫 번째 결과 텍스트 (앞뒤 공백 제거). 없으면 빈 문자열."""
    nodes = doc.xpath(query, namespaces=_NAMESPACES)
    if not nodes:
        return ""
    return "".join(nodes[0].itertext()).strip()
