"""テスト共通フィクスチャ。"""

from pathlib import Path

import pytest

from specscore.config import ServerConfig
from specscore.models.document import OpenAPIDocument
from specscore.models.rules import ScoringConfig
from specscore.services.loader import SpecLoaderService
from specscore.services.scoring import ScoringService

_TESTS_DIR = Path(__file__).parent


@pytest.fixture
def config_dir() -> Path:
    """設定ファイルディレクトリ。"""
    return _TESTS_DIR.parent / "config"


@pytest.fixture
def fixtures_dir() -> Path:
    """テスト用仕様書ディレクトリ。"""
    return _TESTS_DIR / "fixtures"


@pytest.fixture
def scoring_config() -> ScoringConfig:
    """デフォルトのスコアリング設定。"""
    return ScoringConfig()


@pytest.fixture
def scoring_service(scoring_config: ScoringConfig) -> ScoringService:
    """テスト用ScoringService。"""
    return ScoringService(scoring_config)


@pytest.fixture
def loader() -> SpecLoaderService:
    """テスト用SpecLoaderService。"""
    return SpecLoaderService()


@pytest.fixture
def petstore_path(fixtures_dir: Path) -> Path:
    """全カテゴリで満点になる仕様書のパス。"""
    return fixtures_dir / "petstore.yaml"


@pytest.fixture
def petstore_content(petstore_path: Path) -> str:
    return petstore_path.read_text(encoding="utf-8")


@pytest.fixture
def petstore(loader: SpecLoaderService, petstore_content: str) -> OpenAPIDocument:
    """全カテゴリで満点になるドキュメント。"""
    return loader.read_contents(petstore_content)


@pytest.fixture
def server_config(config_dir: Path) -> ServerConfig:
    """テスト用ServerConfig。"""
    return ServerConfig(config_dir=config_dir)
