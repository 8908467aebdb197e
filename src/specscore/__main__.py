"""specscore MCPサーバーのコマンドラインエントリポイント。"""

if __name__ == "__main__":
    import uvicorn

    from specscore.config import ServerConfig
    from specscore.logging import configure_logging
    from specscore.server import create_server

    config = ServerConfig()
    configure_logging(config.log_level)
    mcp = create_server(config)
    app = mcp.http_app(transport="streamable-http")
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
