"""
Session controller: owns the loaded tools, the active filter and the running
layout, and applies user commands to them.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Any, Optional, Tuple

from loguru import logger

from compareGraph.core.build_graph import CategoryIndexer, GraphBuilder, GraphData, GraphMode, node_details
from compareGraph.core.catalog import CatalogClient, ComparisonResolver, ResolutionReport
from compareGraph.core.errors import ToolLookupError, UserInputError
from compareGraph.core.layout import ForceSimulation
from compareGraph.core.session.commands import (
    CommandResult,
    DragNode,
    DragPhase,
    LoadTool,
    Notice,
    NoticeLevel,
    RemoveTool,
    SelectNode,
    SetFilter
)
from compareGraph.core.tool_store import ToolStore
from compareGraph.utils.config_manager import config_manager


@dataclass
class Session:
    """State of one exploration session"""
    store: ToolStore = field(default_factory=ToolStore)
    categories: CategoryIndexer = field(default_factory=CategoryIndexer)
    graph: GraphData = field(default_factory=GraphData)
    simulation: Optional[ForceSimulation] = None
    notice: Optional[Notice] = None
    last_report: Optional[ResolutionReport] = None
    busy: bool = False

    @property
    def empty_state(self) -> bool:
        return self.graph.empty


class SessionController:
    """
    Session Controller

    Every user interaction arrives as a command. A command is applied in full
    (store, categories, graph, fresh simulation) before the next one is
    accepted; a search issued while another search is in flight is rejected.
    """

    def __init__(
        self,
        client=None,
        mode: Optional[GraphMode] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        layout_config: Optional[Dict[str, Any]] = None,
        seed: Optional[int] = None,
        max_workers: Optional[int] = None
    ):
        """
        Initialize session controller.

        Args:
            client: Catalog collaborator exposing fetch_tool (CatalogClient if None)
            mode: Graph building mode (uses session config if None)
            width: Canvas width (uses session config if None)
            height: Canvas height (uses session config if None)
            layout_config: Overrides of the layout configuration
            seed: Random seed for every simulation this controller creates
            max_workers: Concurrent comparison fetches (uses catalog config if None)
        """
        self.config = config_manager.get_session_config()
        self.client = client if client is not None else CatalogClient()
        self.builder = GraphBuilder(mode if mode is not None else GraphMode(self.config.get("graph_mode", "full")))
        self.width = width if width is not None else self.config.get("canvas_width", 960)
        self.height = height if height is not None else self.config.get("canvas_height", 640)
        self.notice_ttl = float(self.config.get("notice_ttl_seconds", 4.0))
        self.layout_config = layout_config
        self.seed = seed
        self.max_workers = max_workers

        self._listeners: List[Callable[[Session], None]] = []
        self._handlers = {
            LoadTool: self._load_tool,
            RemoveTool: self._remove_tool,
            SetFilter: self._set_filter,
            DragNode: self._drag_node,
            SelectNode: self._select_node,
        }

        self.session: Session = Session()
        self.resolver: ComparisonResolver = ComparisonResolver(self.session.store, self.client, max_workers=max_workers)
        logger.info(f"Session controller ready ({self.builder.mode.value} graph mode)")

    # ------------------------------------------------------------------
    # Lifecycle

    def new_session(self) -> Session:
        """Discard the current session and start an empty one."""
        self.session = Session()
        self.resolver = ComparisonResolver(self.session.store, self.client, max_workers=self.max_workers)
        logger.info("Started new session")
        self._emit()
        return self.session

    def close(self) -> None:
        """Tear down the session and release the catalog client."""
        self.session.store.clear()
        self.session.categories.reset()
        self.session.graph = GraphData()
        self.session.simulation = None
        close_client = getattr(self.client, "close", None)
        if callable(close_client):
            close_client()
        logger.info("Session closed")

    def subscribe(self, callback: Callable[[Session], None]) -> None:
        """Register a callback invoked after every change to the session."""
        self._listeners.append(callback)

    # ------------------------------------------------------------------
    # Commands

    def dispatch(self, command) -> CommandResult:
        """
        Apply one command.

        User-input and lookup errors are turned into a notice and a failed
        result; the session is left as it was before the command.
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command: {type(command).__name__}")

        try:
            return handler(command)
        except UserInputError as e:
            logger.warning(f"{type(command).__name__} rejected: {e}")
            self._notify(str(e), NoticeLevel.INFO)
            return CommandResult(ok=False, message=str(e))
        except ToolLookupError as e:
            logger.error(f"Lookup of '{e.tool_id}' failed: {e}")
            self._notify(f"Error: {e}", NoticeLevel.ERROR)
            return CommandResult(ok=False, message=str(e), data={'status_code': e.status_code})

    def _load_tool(self, command: LoadTool) -> CommandResult:
        tool_id = (command.tool_id or "").strip()
        store = self.session.store

        if not tool_id:
            raise UserInputError("Please enter a toolId")
        if self.session.busy:
            raise UserInputError("A search is already in progress")
        if store.has(tool_id):
            raise UserInputError(f"Tool '{tool_id}' is already loaded")

        self.session.busy = True
        try:
            logger.info(f"Searching tool '{tool_id}'")
            record = self.client.fetch_tool(tool_id)

            known_ids = set(store.ids())
            if not store.put(tool_id, record):
                raise UserInputError(f"Tool '{tool_id}' is already loaded")

            try:
                report = self.resolver.resolve(record)
                self._rebuild()
            except Exception:
                logger.exception(f"Loading '{tool_id}' failed, restoring previous session state")
                self._rollback(known_ids)
                raise
            self.session.last_report = report
        finally:
            self.session.busy = False

        logger.info(f"Loaded '{record.display_name}' with {len(report.loaded)} new comparison(s)")
        return CommandResult(
            ok=True,
            message=f"Loaded '{record.display_name}'",
            data={'resolution': report.to_dict()}
        )

    def _remove_tool(self, command: RemoveTool) -> CommandResult:
        removed = self.session.store.remove(command.tool_id)
        if removed:
            logger.info(f"Removed tool '{command.tool_id}'")
        self._rebuild()
        return CommandResult(ok=True, message="" if removed else f"Tool '{command.tool_id}' was not loaded",
                             data={'removed': removed, 'empty_state': self.session.empty_state})

    def _set_filter(self, command: SetFilter) -> CommandResult:
        label = self.session.categories.select(command.label)
        self._rebuild()
        return CommandResult(ok=True, data={'filter': label})

    def _drag_node(self, command: DragNode) -> CommandResult:
        simulation = self.session.simulation
        if simulation is None or command.node_id not in simulation.index:
            logger.debug(f"Ignoring drag of unknown node '{command.node_id}'")
            return CommandResult(ok=False, message=f"Node '{command.node_id}' is not displayed")

        phase = DragPhase(command.phase)
        if phase == DragPhase.START:
            simulation.drag_start(command.node_id)
        elif phase == DragPhase.MOVE:
            if command.x is None or command.y is None:
                return CommandResult(ok=False, message="Drag move needs pointer coordinates")
            simulation.drag_move(command.node_id, command.x, command.y)
        else:
            simulation.drag_end(command.node_id)

        return CommandResult(ok=True, data={'position': simulation.position(command.node_id)})

    def _select_node(self, command: SelectNode) -> CommandResult:
        node = self.session.graph.get_node(command.node_id)
        if node is None:
            return CommandResult(ok=False, message=f"Node '{command.node_id}' is not displayed")
        return CommandResult(ok=True, data=node_details(node))

    # ------------------------------------------------------------------
    # Graph and layout

    def _rebuild(self) -> None:
        """Re-derive categories and graph, and seed a fresh simulation."""
        session = self.session
        session.categories.refresh(session.store)
        session.graph = self.builder.build(session.store, session.categories.active)

        if session.graph.empty:
            session.simulation = None
            logger.info("No tools to display, showing empty state")
        else:
            session.simulation = ForceSimulation(
                session.graph,
                width=self.width,
                height=self.height,
                config=self.layout_config,
                seed=self.seed
            )
        self._emit()

    def _rollback(self, known_ids) -> None:
        """Drop tools stored by a failed load and rebuild from what remains."""
        store = self.session.store
        for tool_id in [tool_id for tool_id in store.ids() if tool_id not in known_ids]:
            store.remove(tool_id)
        try:
            self._rebuild()
        except Exception:
            logger.exception("Rebuild after rollback failed, clearing the graph")
            self.session.graph = GraphData()
            self.session.simulation = None

    def tick(self) -> bool:
        """Advance the live simulation one step; False when idle."""
        if self.session.simulation is None:
            return False
        return self.session.simulation.tick()

    def positions(self) -> Dict[str, Tuple[float, float]]:
        if self.session.simulation is None:
            return {}
        return self.session.simulation.positions_by_id()

    # ------------------------------------------------------------------
    # Notices

    def current_notice(self, now: Optional[float] = None) -> Optional[Notice]:
        """The visible notice, or None once it has expired."""
        notice = self.session.notice
        if notice is not None and notice.expired(now):
            self.session.notice = None
        return self.session.notice

    def _notify(self, message: str, level: NoticeLevel) -> None:
        self.session.notice = Notice(message=message, level=level, ttl=self.notice_ttl)
        self._emit()

    def _emit(self) -> None:
        for callback in self._listeners:
            callback(self.session)
