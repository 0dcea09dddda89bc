"""Output formats for a laid-out dependency graph."""

from .svg import render_svg, write_svg

__all__ = ["render_svg", "write_svg"]
