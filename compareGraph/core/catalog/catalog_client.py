"""
HTTP client for the remote tool catalog.
"""

import json
from dataclasses import dataclass
from typing import Dict, List, Any, Optional
from urllib.parse import quote

import requests
from loguru import logger

from compareGraph.core.errors import ToolLookupError, ToolNotFoundError, MalformedResponseError
from compareGraph.core.tool_store import ToolRecord
from compareGraph.utils.config_manager import config_manager


REQUIRED_TOOL_FIELDS = ("toolId", "name")

# Starting point offered to whoever submits a new tool
TOOL_TEMPLATE: Dict[str, Any] = {
    "toolId": "example-library",
    "name": "Example Library",
    "supportedPlatforms": ["Linux", "macOS", "Windows"],
    "languageCompatibility": {
        "Python": [">=3.8", "<4.0"]
    },
    "learningCurve": "beginner",
    "documentationQuality": "high",
    "categories": ["Development Tools"],
    "predefinedComparisons": []
}


def validate_tool_payload(payload: Any) -> List[str]:
    """
    Check a tool payload before it is submitted to the catalog.

    Returns:
        List of problems, empty when the payload can be sent
    """
    if not isinstance(payload, dict):
        return ["payload must be a JSON object"]
    return [f"{field_name} is required" for field_name in REQUIRED_TOOL_FIELDS if not payload.get(field_name)]


@dataclass
class CreateResult:
    """Outcome of a POST /tools request"""
    status_code: int
    ok: bool
    body: Any

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status_code': self.status_code,
            'ok': self.ok,
            'body': self.body
        }


class CatalogClient:
    """Fetches tool records from and submits tools to the catalog service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize catalog client.

        Args:
            base_url: Catalog root URL (uses config if None)
            timeout: Request timeout in seconds (uses config if None)
            session: Optional requests session to reuse
        """
        self.config = config_manager.get_catalog_config()
        self.base_url = (base_url or self.config.get("base_url", "")).rstrip("/")
        self.timeout = timeout if timeout is not None else self.config.get("timeout_seconds", 10)
        self.session = session or requests.Session()

        logger.info(f"Initialized catalog client for {self.base_url}")

    def tool_url(self, tool_id: Optional[str] = None) -> str:
        if tool_id is None:
            return f"{self.base_url}/tools"
        return f"{self.base_url}/tools/{quote(tool_id, safe='')}"

    def fetch_tool(self, tool_id: str) -> ToolRecord:
        """
        Fetch one tool record by id.

        Args:
            tool_id: Identifier of the tool

        Returns:
            The parsed tool record

        Raises:
            ToolNotFoundError: Non-200 response
            MalformedResponseError: Body is not a valid tool record
            ToolLookupError: Network failure
        """
        url = self.tool_url(tool_id)
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ToolLookupError(tool_id, f"Network error while fetching '{tool_id}': {e}") from e

        logger.debug(f"Response for '{tool_id}': HTTP {response.status_code}")
        if response.status_code != 200:
            raise ToolNotFoundError(
                tool_id,
                f"Tool '{tool_id}' not found (HTTP {response.status_code})",
                status_code=response.status_code
            )

        try:
            payload = json.loads(response.text)
        except (ValueError, RecursionError) as e:
            raise MalformedResponseError(
                tool_id, f"Could not parse response for '{tool_id}': {e}", status_code=200
            ) from e

        try:
            record = ToolRecord.from_dict(payload)
        except ValueError as e:
            raise MalformedResponseError(tool_id, f"Invalid tool record for '{tool_id}': {e}", status_code=200) from e

        if record.tool_id != tool_id:
            raise MalformedResponseError(
                tool_id,
                f"Catalog returned tool '{record.tool_id}' when asked for '{tool_id}'",
                status_code=200
            )

        return record

    def create_tool(self, payload: Dict[str, Any]) -> CreateResult:
        """
        Submit a new tool to the catalog.

        Args:
            payload: Tool JSON object, must carry toolId and name

        Returns:
            Status and parsed body of the response

        Raises:
            ValueError: If the payload misses required fields
            ToolLookupError: Network failure
        """
        problems = validate_tool_payload(payload)
        if problems:
            raise ValueError(f"Invalid tool payload: {', '.join(problems)}")

        tool_id = payload["toolId"]
        logger.info(f"Submitting tool '{tool_id}' to the catalog")
        try:
            response = self.session.post(self.tool_url(), json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise ToolLookupError(tool_id, f"Network error while submitting '{tool_id}': {e}") from e

        content_type = response.headers.get("content-type", "")
        body: Any = response.text
        if "application/json" in content_type:
            try:
                body = response.json()
            except ValueError:
                logger.warning(f"Catalog declared JSON but body could not be parsed for '{tool_id}'")

        ok = 200 <= response.status_code < 300
        if ok:
            logger.info(f"Tool '{tool_id}' created (HTTP {response.status_code})")
        else:
            logger.error(f"Catalog rejected tool '{tool_id}' (HTTP {response.status_code}): {body}")

        return CreateResult(status_code=response.status_code, ok=ok, body=body)

    def close(self) -> None:
        self.session.close()
