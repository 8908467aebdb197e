"""specscoreのカスタム例外クラス。"""

from pathlib import Path


class SpecScoreError(Exception):
    """specscoreの基底例外クラス。"""


class SpecReadError(SpecScoreError):
    """仕様書を読み取れない、またはJSON/YAMLとしてパースできない場合の例外。"""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Could not read OpenAPI spec: {reason}")
        self.reason = reason


class SpecLoadError(SpecScoreError):
    """パースはできたがOpenAPIドキュメントとして不正な場合の例外。"""

    def __init__(self, messages: list[str]) -> None:
        super().__init__(f"Invalid OpenAPI specification: {', '.join(messages)}")
        self.messages = messages


class ScoringConfigError(SpecScoreError):
    """スコアリングルールファイルが不正な場合の例外。"""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid scoring rules file {path}: {reason}")
        self.path = path
        self.reason = reason


class UnknownCategoryError(SpecScoreError):
    """存在しないスコアリングカテゴリが指定された場合の例外。"""

    def __init__(self, category: str) -> None:
        super().__init__(f"Unknown scoring category: {category}")
        self.category = category
