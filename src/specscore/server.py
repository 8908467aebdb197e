"""FastMCPベースのMCPサーバーエントリポイント。"""

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from specscore.config import ServerConfig, load_scoring_config
from specscore.resources.rules import register_rules_resources
from specscore.services.loader import SpecLoaderService
from specscore.services.scoring import ScoringService
from specscore.tools.scoring import register_scoring_tools


def create_server(config: ServerConfig | None = None) -> FastMCP:
    """specscore MCPサーバーを作成し、ツール・リソースを登録する。

    Args:
        config: サーバー設定。Noneの場合はデフォルト設定を使用。

    Returns:
        設定済みのFastMCPインスタンス。

    Raises:
        ScoringConfigError: ルールファイルが不正な場合。
    """
    if config is None:
        config = ServerConfig()

    mcp = FastMCP("specscore")

    scoring_config = load_scoring_config(config.rules_path)

    # サービス層
    scoring_service = ScoringService(scoring_config)
    loader = SpecLoaderService(scoring_config.parser)

    # MCPインターフェース登録
    register_scoring_tools(mcp, scoring_service, loader)
    register_rules_resources(mcp, scoring_config)

    # ヘルスチェックエンドポイント
    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return mcp
