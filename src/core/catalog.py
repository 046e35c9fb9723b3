"""필사본 목록(Catalog) 모듈.

데이터 디렉토리의 TEI/XML 파일을 훑어 메타데이터 목록을 만든다.

    xml/
    ├── ruskin-diary.xml        # slug = "ruskin-diary"
    ├── ruskin-letter-1.xml     # slug = "ruskin-letter-1"
    └── ...

목록은 처음 접근할 때 한 번만 만들고, 객체가 살아 있는 동안 그대로 쓴다.
디스크의 파일이 바뀌어도 프로세스를 다시 시작하기 전에는 반영되지 않는다.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from core.transformer import (
    ConfigError,
    ManuscriptMetadata,
    TeiTransformer,
    TransformerError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    """목록 항목 하나."""

    slug: str                      # 파일명에서 확장자를 뺀 것 (URL 식별자)
    filename: str
    path: Path
    metadata: ManuscriptMetadata

    @property
    def title(self) -> str:
        return self.metadata.title

    def searchable_text(self) -> str:
        """검색 대상 문자열: 제목·부제·설명·저자를 공백으로 이어 소문자화."""
        meta = self.metadata
        return " ".join([meta.title, meta.subtitle, meta.description, meta.author]).lower()


class ManuscriptCatalog:
    """필사본 목록.

    사용법:
        catalog = ManuscriptCatalog("examples/library/xml", transformer)
        entries = catalog.get_all()
        entry = catalog.find_by_slug("ruskin-diary")
        hits = catalog.search("art")
    """

    def __init__(self, data_dir: str | Path, transformer: TeiTransformer):
        data_dir = Path(data_dir)
        if not data_dir.is_dir():
            raise ConfigError(
                f"데이터 디렉토리를 찾을 수 없습니다: {data_dir}\n"
                "→ 해결: --xml-dir 옵션 또는 TEI_XML_DIR 환경변수를 확인하세요."
            )
        self._data_dir = data_dir
        self._transformer = transformer
        self._entries: Optional[tuple[CatalogEntry, ...]] = None
        self._lock = threading.Lock()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def transformer(self) -> TeiTransformer:
        return self._transformer

    @property
    def scanned(self) -> bool:
        """스캔이 이미 끝났는지 여부."""
        return self._entries is not None

    def get_all(self) -> tuple[CatalogEntry, ...]:
        """전체 목록을 제목순으로 반환한다.

        첫 호출에서만 디렉토리를 스캔하고, 이후에는 같은 튜플 객체를 돌려준다.
        """
        if self._entries is None:
            with self._lock:
                if self._entries is None:
                    self._entries = self._scan()
        return self._entries

    def find_by_slug(self, slug: str) -> Optional[CatalogEntry]:
        """slug로 항목을 찾는다. 없으면 None (예외 아님)."""
        for entry in self.get_all():
            if entry.slug == slug:
                return entry
        return None

    def get_file_path(self, slug: str) -> Optional[Path]:
        """slug에 해당하는 XML 파일 경로. 없으면 None."""
        entry = self.find_by_slug(slug)
        return entry.path if entry else None

    def search(self, query: str) -> tuple[CatalogEntry, ...]:
        """제목·부제·설명·저자에서 부분 문자열을 찾는다.

        입력: query: 검색어. 비어 있으면 전체 목록을 그대로 반환한다.
        출력: 일치 항목. 순서는 목록 순서(제목순) 그대로이며 관련도 정렬은 없다.
        """
        needle = query.strip().lower()
        if not needle:
            return self.get_all()
        return tuple(entry for entry in self.get_all() if needle in entry.searchable_text())

    def __len__(self) -> int:
        return len(self.get_all())

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.get_all())

    def _scan(self) -> tuple[CatalogEntry, ...]:
        """디렉토리의 *.xml 파일(하위 디렉토리 제외)에서 메타데이터를 추출한다.

        추출에 실패한 파일은 목록에서 조용히 빠진다 (자리표시 항목도 만들지 않는다).
        """
        entries = []
        for file_path in sorted(self._data_dir.glob("*.xml")):
            if not file_path.is_file():
                continue
            try:
                metadata = self._transformer.extract_metadata(file_path)
            except (TransformerError, OSError) as e:
                logger.warning(f"목록에서 제외: {file_path.name} ({e})")
                continue

            entries.append(CatalogEntry(
                slug=file_path.stem,
                filename=file_path.name,
                path=file_path,
                metadata=metadata,
            ))

        # 안정 정렬: 제목이 같으면 파일명 순서 유지
        entries = sorted(entries, key=lambda e: e.title.lower())
        logger.info(f"목록 스캔 완료: {self._data_dir} ({len(entries)}건)")
        return tuple(entries)
