"""TEI 필사본 뷰어 CLI 도구.

사용법:
    python -m cli list [--xml-dir <경로>] [--xslt <경로>]
    python -m cli search <검색어> [--xml-dir <경로>]
    python -m cli show <slug> [--xml-dir <경로>]
    python -m cli render <slug> [--xml-dir <경로>] [--xslt <경로>]

pip install -e . 후 실행하거나, src/ 디렉토리에서 실행한다.
"""

import argparse
import json
import sys
from pathlib import Path

# src/ 디렉토리를 Python 경로에 추가하여 pip install 없이도 실행 가능하게 한다.
_src_dir = str(Path(__file__).resolve().parent.parent)
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from core.catalog import CatalogEntry, ManuscriptCatalog  # noqa: E402
from core.transformer import TeiTransformer, TransformerError  # noqa: E402
from core.viewer_config import ViewerConfig  # noqa: E402


def _open_catalog(args) -> ManuscriptCatalog:
    """옵션·환경변수에서 목록을 연다. 설정 오류면 종료한다."""
    config = ViewerConfig(xml_dir=args.xml_dir, xslt_path=args.xslt)
    try:
        transformer = TeiTransformer(config.xslt_path)
        return ManuscriptCatalog(config.xml_dir, transformer)
    except TransformerError as e:
        print(f"오류: {e}", file=sys.stderr)
        sys.exit(1)


def _print_entries(entries: tuple[CatalogEntry, ...]):
    if not entries:
        print("  (필사본이 없습니다)")
        return
    for entry in entries:
        meta = entry.metadata
        author = meta.author or "?"
        print(f"  [{entry.slug}] {meta.title or '(제목 없음)'}  ({author}, {meta.date or '?'})")


def cmd_list(args):
    """전체 필사본 목록을 출력한다."""
    catalog = _open_catalog(args)
    entries = catalog.get_all()
    print(f"디렉토리: {catalog.data_dir}")
    print(f"필사본 수: {len(entries)}")
    print()
    _print_entries(entries)


def cmd_search(args):
    """검색 결과를 출력한다."""
    catalog = _open_catalog(args)
    results = catalog.search(args.query)
    print(f"검색어: {args.query!r} ({len(results)}건)")
    _print_entries(results)


def cmd_show(args):
    """필사본 한 건의 메타데이터를 JSON으로 출력한다."""
    catalog = _open_catalog(args)
    entry = catalog.find_by_slug(args.slug)
    if entry is None:
        print(f"오류: 필사본을 찾을 수 없습니다: {args.slug}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps(
        {"slug": entry.slug, "metadata": entry.metadata.to_dict()},
        ensure_ascii=False,
        indent=4,
    ))


def cmd_render(args):
    """필사본 한 건을 HTML로 변환해 표준 출력에 쓴다."""
    catalog = _open_catalog(args)
    path = catalog.get_file_path(args.slug)
    if path is None:
        print(f"오류: 필사본을 찾을 수 없습니다: {args.slug}", file=sys.stderr)
        sys.exit(1)
    try:
        sys.stdout.write(catalog.transformer.transform(path))
    except TransformerError as e:
        print(f"오류: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="tei-manuscript-viewer",
        description="TEI 필사본 뷰어 CLI 도구",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--xml-dir", default=None, help="TEI/XML 필사본 디렉토리")
    common.add_argument("--xslt", default=None, help="XSLT 스타일시트 경로")

    subparsers = parser.add_subparsers(dest="command")

    p_list = subparsers.add_parser("list", parents=[common], help="필사본 목록을 출력한다")
    p_list.set_defaults(func=cmd_list)

    p_search = subparsers.add_parser("search", parents=[common], help="필사본을 검색한다")
    p_search.add_argument("query", help="검색어 (제목·부제·설명·저자)")
    p_search.set_defaults(func=cmd_search)

    p_show = subparsers.add_parser("show", parents=[common], help="메타데이터를 JSON으로 출력한다")
    p_show.add_argument("slug", help="필사본 slug (파일명에서 .xml을 뺀 것)")
    p_show.set_defaults(func=cmd_show)

    p_render = subparsers.add_parser("render", parents=[common], help="HTML로 변환해 출력한다")
    p_render.add_argument("slug", help="필사본 slug")
    p_render.set_defaults(func=cmd_render)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
