"""웹 앱 진입점.

사용법:
    python -m app serve [--xml-dir <XML 디렉토리>] [--xslt <스타일시트>] [--port 8000] [--host 127.0.0.1]
    tei-manuscript-server serve ...   (pip install -e . 이후)

--xml-dir/--xslt를 생략하면 TEI_XML_DIR/TEI_XSLT_PATH 환경변수, .env, 기본값 순으로 정한다.
"""

import argparse
import logging
import sys
from pathlib import Path

# src/ 디렉토리를 Python 경로에 추가
_src_dir = str(Path(__file__).resolve().parent.parent)
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="tei-manuscript-server",
        description="TEI 필사본 뷰어 웹 서버",
    )
    subparsers = parser.add_subparsers(dest="command")

    p_serve = subparsers.add_parser("serve", help="웹 서버를 실행한다")
    p_serve.add_argument("--xml-dir", default=None, help="TEI/XML 필사본 디렉토리")
    p_serve.add_argument("--xslt", default=None, help="XSLT 스타일시트 경로")
    p_serve.add_argument("--port", type=int, default=8000, help="포트 (기본: 8000)")
    p_serve.add_argument("--host", default="127.0.0.1", help="호스트 (기본: 127.0.0.1)")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        import uvicorn
        from app.server import configure
        from core.transformer import ConfigError

        logging.basicConfig(level=logging.INFO, format="%(levelname)s:     %(name)s - %(message)s")

        # 스타일시트·목록을 서버 시작 전에 모두 준비한다
        try:
            app = configure(xml_dir=args.xml_dir, xslt_path=args.xslt)
        except ConfigError as e:
            print(f"오류: {e}", file=sys.stderr)
            sys.exit(1)

        print(f"서버: http://{args.host}:{args.port}")
        uvicorn.run(app, host=args.host, port=args.port, reload=False)


if __name__ == "__main__":
    main()
