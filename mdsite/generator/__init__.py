"""Utilities for parsing, rendering, and generating mdsite pages."""

from .models import IndexItem, IndexItemPage, Page
from .page_builder import PageBuilder
from .page_generator import PageContentGenerator
from .renderer import MarkdownRenderer

__all__ = [
    "IndexItem",
    "IndexItemPage",
    "MarkdownRenderer",
    "Page",
    "PageBuilder",
    "PageContentGenerator",
]
