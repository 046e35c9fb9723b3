"""pytest 공통 설정 및 픽스처.

TEI 샘플 문서를 tmp_path에 만들어 주는 헬퍼를 모아 둔다.
"""

import sys
from pathlib import Path
from xml.sax.saxutils import escape

import pytest

# src/ 디렉토리를 경로에 추가
_src = str(Path(__file__).resolve().parent.parent / "src")
if _src not in sys.path:
    sys.path.insert(0, _src)

from core.transformer import TeiTransformer  # noqa: E402
from core.viewer_config import BUNDLED_XSLT  # noqa: E402


def make_tei(
    title: str | None = "Untitled Manuscript",
    subtitle: str | None = None,
    forename: str | None = None,
    surname: str | None = None,
    idno: str | None = None,
    repository: str | None = None,
    date: str | None = None,
    extent: str | None = None,
    description: str | None = None,
    body: str = "<p>Text.</p>",
) -> str:
    """TEI P5 문서 문자열을 만든다. None인 필드는 요소 자체를 넣지 않는다."""

    def el(tag, value, attrs=""):
        if value is None:
            return ""
        return f"<{tag}{attrs}>{escape(value)}</{tag}>"

    author = ""
    if forename is not None or surname is not None:
        author = (
            "<author><persName>"
            f"{el('forename', forename)}{el('surname', surname)}"
            "</persName></author>"
        )

    ms_items = el("note", description)
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<TEI xmlns="http://www.tei-c.org/ns/1.0">
  <teiHeader>
    <fileDesc>
      <titleStmt>
        {el("title", title, ' type="main"')}
        {el("title", subtitle, ' type="sub"')}
        {author}
      </titleStmt>
      <publicationStmt><p>test</p></publicationStmt>
      <sourceDesc>
        <msDesc>
          <msIdentifier>
            {el("repository", repository)}
            {el("idno", idno)}
          </msIdentifier>
          <msContents><msItem>{ms_items}</msItem></msContents>
          <physDesc><objectDesc><supportDesc>{el("extent", extent)}</supportDesc></objectDesc></physDesc>
          <history><origin>{el("origDate", date)}</origin></history>
        </msDesc>
      </sourceDesc>
    </fileDesc>
  </teiHeader>
  <text><body><div>{body}</div></body></text>
</TEI>
"""


def write_tei(directory: Path, slug: str, **fields) -> Path:
    """directory/{slug}.xml에 TEI 문서를 쓴다."""
    path = directory / f"{slug}.xml"
    path.write_text(make_tei(**fields), encoding="utf-8")
    return path


@pytest.fixture
def transformer():
    """패키지에 포함된 스타일시트를 쓰는 변환기."""
    return TeiTransformer(BUNDLED_XSLT)


@pytest.fixture
def ruskin_dir(tmp_path):
    """편지·일기 두 건과 깨진 파일 하나가 있는 데이터 디렉토리."""
    xml_dir = tmp_path / "xml"
    xml_dir.mkdir()
    write_tei(
        xml_dir, "ruskin-letter-1",
        title="Letter on Art",
        subtitle="To his father",
        forename="John", surname="Ruskin",
        idno="MS L-1", repository="Ruskin Library",
        date="1845", extent="2 leaves",
        description="A letter about Tintoretto.",
        body='<p>I have been overwhelmed by <persName ref="#tin">Tintoret</persName>.</p>',
    )
    write_tei(
        xml_dir, "ruskin-diary",
        title="Diary Entries",
        subtitle="Notes from the Alps",
        forename="John", surname="Ruskin",
        description="Observations of glaciers.",
    )
    (xml_dir / "broken.xml").write_text("<TEI><unclosed>", encoding="utf-8")
    return xml_dir
