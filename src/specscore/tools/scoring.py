"""スコアリングのMCPツール定義。"""

from typing import Any

from fastmcp import FastMCP

from specscore.models.errors import SpecScoreError
from specscore.services.loader import SpecLoaderService
from specscore.services.scoring import ScoringService


def register_scoring_tools(mcp: FastMCP, scoring_service: ScoringService, loader: SpecLoaderService) -> None:
    """スコアリング関連のMCPツールを登録する。"""

    @mcp.tool()
    async def score_spec(spec_content: str) -> dict[str, Any]:
        """OpenAPI仕様書の品質をスコアリングする。

        7つのカテゴリ（スキーマ、説明、パス、レスポンスコード、例、セキュリティ、
        ベストプラクティス）を評価し、合計点とグレード（A〜F）を返します。

        Args:
            spec_content: OpenAPI仕様書のJSONまたはYAMLテキスト。
        """
        try:
            document = loader.read_contents(spec_content)
            return scoring_service.score(document).model_dump()
        except SpecScoreError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def score_spec_location(location: str) -> dict[str, Any]:
        """URLまたはファイルパスで指定したOpenAPI仕様書をスコアリングする。

        Args:
            location: http(s) URL、file:// URI、またはサーバーから参照可能なファイルパス。
        """
        try:
            document = await loader.load(location)
            return scoring_service.score(document).model_dump()
        except SpecScoreError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def score_spec_category(spec_content: str, category: str) -> dict[str, Any]:
        """OpenAPI仕様書を単一カテゴリのみでスコアリングする。

        Args:
            spec_content: OpenAPI仕様書のJSONまたはYAMLテキスト。
            category: カテゴリキー。schema, descriptions, paths, responses,
                examples, security, best_practices のいずれか。
        """
        try:
            document = loader.read_contents(spec_content)
            return scoring_service.score_category(document, category).model_dump()
        except SpecScoreError as e:
            return {"error": type(e).__name__, "message": str(e)}
