"""TEI 변환·목록 모듈. 웹 앱과 CLI가 공통으로 쓴다."""

from .catalog import CatalogEntry, ManuscriptCatalog
from .transformer import (
    ConfigError,
    DocumentNotFound,
    ManuscriptMetadata,
    ParseError,
    TeiTransformer,
    TransformError,
    TransformerError,
    TransformResult,
)
from .viewer_config import ViewerConfig

__all__ = [
    "TeiTransformer",
    "ManuscriptCatalog",
    "CatalogEntry",
    "ManuscriptMetadata",
    "TransformResult",
    "ViewerConfig",
    "TransformerError",
    "ConfigError",
    "DocumentNotFound",
    "ParseError",
    "TransformError",
]
