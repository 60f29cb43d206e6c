from .graph_renderer import render_snapshot

__all__ = ['render_snapshot']
