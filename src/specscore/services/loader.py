"""OpenAPI仕様書の読み込みサービス。

JSON/YAMLテキスト、ローカルファイル、HTTP(S) URLのいずれかから
OpenAPIDocument を構築する。
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

import httpx
import yaml
from loguru import logger
from pydantic import ValidationError

from specscore.models.document import OpenAPIDocument
from specscore.models.errors import SpecLoadError, SpecReadError
from specscore.models.rules import LoaderSettings

_REMOTE_SCHEMES = ("http", "https")


class SpecLoaderService:
    """仕様書テキストや所在から OpenAPIDocument を生成する。"""

    def __init__(
        self,
        settings: LoaderSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings if settings is not None else LoaderSettings()
        self._transport = transport

    def read_contents(self, raw: str) -> OpenAPIDocument:
        """JSONまたはYAMLテキストをパースしてドキュメントを構築する。

        Args:
            raw: 仕様書のテキスト。

        Returns:
            検証済みのOpenAPIDocument。

        Raises:
            SpecReadError: テキストが空、構文エラー、またはトップレベルがマッピングでない場合。
            SpecLoadError: openapi フィールドが無い、または構造が不正な場合。
        """
        if not raw or not raw.strip():
            raise SpecReadError("content is empty")

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            # YAMLはインデントのタブを受け付けないため JSON を先に試す
            try:
                data = yaml.safe_load(raw)
            except yaml.YAMLError as e:
                raise SpecReadError(f"content is neither valid JSON nor YAML ({e})") from e

        if not isinstance(data, dict):
            raise SpecReadError("top-level value must be a mapping")

        return self._build_document(data)

    async def load(self, location: str) -> OpenAPIDocument:
        """URLまたはファイルパスから仕様書を読み込む。

        Args:
            location: ``http(s)://`` URL、``file://`` URI、またはローカルパス。

        Returns:
            検証済みのOpenAPIDocument。

        Raises:
            SpecReadError: 取得に失敗した場合、または内容をパースできない場合。
            SpecLoadError: 内容がOpenAPIドキュメントとして不正な場合。
        """
        parsed = urlparse(location)
        if parsed.scheme in _REMOTE_SCHEMES:
            raw = await self._fetch(location)
        elif parsed.scheme == "file":
            raw = self._read_file(Path(unquote(parsed.path)))
        else:
            raw = self._read_file(Path(location))
        return self.read_contents(raw)

    async def _fetch(self, url: str) -> str:
        timeout = httpx.Timeout(
            self.settings.read_timeout_ms / 1000,
            connect=self.settings.connection_timeout_ms / 1000,
        )
        logger.debug("Fetching OpenAPI spec from {url}", url=url)
        try:
            async with httpx.AsyncClient(
                timeout=timeout,
                follow_redirects=self.settings.follow_redirects,
                max_redirects=self.settings.max_redirects,
                headers=self.settings.default_headers,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("Fetching {url} failed with HTTP {status}", url=url, status=e.response.status_code)
            raise SpecReadError(f"{url} returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning("Fetching {url} failed: {error}", url=url, error=e)
            raise SpecReadError(f"failed to fetch {url} ({e})") from e
        return response.text

    @staticmethod
    def _read_file(path: Path) -> str:
        logger.debug("Reading OpenAPI spec from {path}", path=path)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Reading {path} failed: {error}", path=path, error=e)
            raise SpecReadError(f"failed to read {path} ({e})") from e

    @staticmethod
    def _build_document(data: dict[str, Any]) -> OpenAPIDocument:
        if not data.get("openapi"):
            raise SpecLoadError(["attribute openapi is missing"])

        try:
            return OpenAPIDocument.model_validate(data)
        except ValidationError as e:
            messages = [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
            ]
            raise SpecLoadError(messages) from e
