"""
Comparison Resolver: loads the tools a searched tool lists as predefined comparisons.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Tuple

from loguru import logger
from tqdm import tqdm

from compareGraph.core.errors import ToolLookupError
from compareGraph.core.tool_store import ToolRecord, ToolStore
from compareGraph.utils.config_manager import config_manager


@dataclass
class ResolutionReport:
    """Outcome of resolving one tool's comparisons"""
    tool_id: str
    requested: List[str] = field(default_factory=list)
    loaded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tool_id': self.tool_id,
            'requested': self.requested,
            'loaded': self.loaded,
            'failed': self.failed,
            'skipped': self.skipped
        }


class ComparisonResolver:
    """
    Comparison Resolver

    Fetches every comparison of a just-loaded tool that the store does not hold
    yet. Fetches run concurrently on a thread pool; results are merged into the
    store on the calling thread once all of them have settled. Failures of
    individual comparisons are absorbed so a dangling reference never aborts a
    load. Only one level is resolved.
    """

    def __init__(self, store: ToolStore, client, max_workers: Optional[int] = None, show_progress: Optional[bool] = None):
        """
        Initialize comparison resolver

        Args:
            store: Store that receives the fetched comparisons
            client: Catalog collaborator exposing fetch_tool(tool_id)
            max_workers: Concurrent fetches (uses config if None)
            show_progress: Display a tqdm bar while fetches settle (uses config if None)
        """
        self.store = store
        self.client = client
        catalog_config = config_manager.get_catalog_config()
        self.max_workers = max_workers or catalog_config.get("max_workers", 8)
        self.show_progress = catalog_config.get("show_progress", False) if show_progress is None else show_progress

    def pending_comparisons(self, record: ToolRecord) -> Tuple[List[str], List[str]]:
        """
        Split a tool's comparisons into ids to fetch and ids already loaded.

        Duplicates and self references are dropped, order is preserved.
        """
        to_fetch: List[str] = []
        skipped: List[str] = []
        seen = set()
        for comparison_id in record.predefined_comparisons:
            if comparison_id in seen or comparison_id == record.tool_id:
                continue
            seen.add(comparison_id)
            if self.store.has(comparison_id):
                skipped.append(comparison_id)
            else:
                to_fetch.append(comparison_id)
        return to_fetch, skipped

    def resolve(self, record: ToolRecord) -> ResolutionReport:
        """
        Load the missing comparisons of a tool into the store.

        Args:
            record: The tool that was just loaded

        Returns:
            Report of requested, loaded, failed and skipped ids
        """
        to_fetch, skipped = self.pending_comparisons(record)
        report = ResolutionReport(tool_id=record.tool_id, requested=to_fetch, skipped=skipped)

        if not record.predefined_comparisons:
            logger.info(f"No predefined comparisons to load for '{record.tool_id}'")
            return report

        if not to_fetch:
            logger.info(f"All comparisons of '{record.tool_id}' are already loaded")
            return report

        logger.info(f"Loading {len(to_fetch)} comparison(s) for '{record.tool_id}': {', '.join(to_fetch)}")
        results = self._fetch_all(to_fetch)

        # Merge in request order, re-checking the store for responses that became stale
        for comparison_id in to_fetch:
            comparison = results.get(comparison_id)
            if comparison is None:
                report.failed.append(comparison_id)
            elif self.store.put(comparison_id, comparison):
                report.loaded.append(comparison_id)
            else:
                report.skipped.append(comparison_id)

        logger.info(
            f"Comparisons for '{record.tool_id}' processed: "
            f"{len(report.loaded)} loaded, {len(report.failed)} unavailable, {len(report.skipped)} already present"
        )
        return report

    def _fetch_all(self, tool_ids: List[str]) -> Dict[str, Optional[ToolRecord]]:
        results: Dict[str, Optional[ToolRecord]] = {}
        workers = max(1, min(self.max_workers, len(tool_ids)))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(self._fetch_one, tool_id): tool_id for tool_id in tool_ids}
            for future in tqdm(
                as_completed(futures),
                total=len(futures),
                desc="Loading comparisons",
                disable=not self.show_progress
            ):
                tool_id, record = future.result()
                results[tool_id] = record

        return results

    def _fetch_one(self, tool_id: str) -> Tuple[str, Optional[ToolRecord]]:
        """Fetch a single comparison; any failure becomes None."""
        try:
            record = self.client.fetch_tool(tool_id)
            logger.debug(f"Comparison '{tool_id}' loaded")
            return tool_id, record
        except ToolLookupError as e:
            logger.warning(f"Comparison '{tool_id}' unavailable: {e}")
            return tool_id, None
        except Exception as e:
            logger.warning(f"Comparison '{tool_id}' failed with {type(e).__name__}: {e}")
            return tool_id, None
