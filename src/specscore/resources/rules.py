"""スコアリングルールのMCPリソース定義。"""

import yaml
from fastmcp import FastMCP

from specscore.models.rules import ScoringConfig
from specscore.services.scoring import CATEGORY_KEYS


def register_rules_resources(mcp: FastMCP, config: ScoringConfig) -> None:
    """スコアリングルール関連のMCPリソースを登録する。"""

    @mcp.resource("specscore://rules")
    async def scoring_rules() -> str:
        """適用中のスコアリングルールを取得する。

        カテゴリごとの配点、グレード閾値、各チェックの有効/無効とペナルティを
        ルールファイルと同じYAML形式で返します。
        """
        data = config.model_dump(mode="json", by_alias=True)
        return yaml.dump(data, allow_unicode=True, default_flow_style=False, sort_keys=False)

    @mcp.resource("specscore://categories")
    async def scoring_categories() -> str:
        """スコアリングカテゴリのキーと配点を取得する。

        score_spec_category ツールに渡すカテゴリキーの一覧を返します。
        """
        weights = config.weights
        max_scores = (
            weights.schema_and_types,
            weights.descriptions_and_documentation,
            weights.paths_and_operations,
            weights.response_codes,
            weights.examples_and_samples,
            weights.security,
            weights.best_practices,
        )
        data = {
            "categories": [
                {"key": key, "max_score": max_score}
                for key, max_score in zip(CATEGORY_KEYS, max_scores, strict=True)
            ]
        }
        return yaml.dump(data, allow_unicode=True, default_flow_style=False, sort_keys=False)
