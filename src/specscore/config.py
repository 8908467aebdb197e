"""specscoreサーバーの設定管理。"""

from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError
from pydantic_settings import BaseSettings

from specscore.models.errors import ScoringConfigError
from specscore.models.rules import ScoringConfig

_PACKAGE_ROOT = Path(__file__).parent
_REPO_ROOT = _PACKAGE_ROOT.parent.parent


class ServerConfig(BaseSettings):
    """サーバー設定。環境変数から読み込み可能。"""

    model_config = {"env_prefix": "SPECSCORE_"}

    config_dir: Path = _REPO_ROOT / "config"
    rules_file: str = "scoring-rules.yaml"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @property
    def rules_path(self) -> Path:
        return self.config_dir / self.rules_file


def load_scoring_config(path: Path) -> ScoringConfig:
    """YAMLのルールファイルからスコアリング設定を読み込む。

    Args:
        path: ルールファイルのパス。存在しない場合はデフォルト設定を返す。

    Returns:
        スコアリング設定。

    Raises:
        ScoringConfigError: ファイルのパースや値の検証に失敗した場合。
    """
    if not path.exists():
        logger.info("Scoring rules file {path} not found, using defaults", path=path)
        return ScoringConfig()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ScoringConfigError(path, str(e)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ScoringConfigError(path, "top-level value must be a mapping")

    try:
        config = ScoringConfig.model_validate(data)
    except ValidationError as e:
        raise ScoringConfigError(path, str(e)) from e

    logger.info("Loaded scoring rules from {path}", path=path)
    if config.weights.total_weight != 100:
        logger.warning(
            "Category weights sum to {total}, not 100; scores will not be on a 100-point scale",
            total=config.weights.total_weight,
        )
    return config
