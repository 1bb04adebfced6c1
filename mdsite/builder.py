"""Orchestrate a full site build from a :class:`~mdsite.config.SiteConfig`.

A build runs in two concurrent phases. The first reads every document's
front matter into a :class:`~mdsite.generator.models.Page`; its results are
aggregated into the index menu. The second renders every page and, alongside,
writes the index page, the RSS feed, the stylesheet, and the copied images.
Any failing task cancels the rest of its phase and fails the build.

Example
-------
>>> from pathlib import Path
>>> from mdsite.builder import SiteBuilder
>>> from mdsite.config import load_site_config
>>> builder = SiteBuilder(load_site_config(Path("mdsite.yaml")))  # doctest: +SKIP
>>> result = builder.run()  # doctest: +SKIP
>>> sorted(p.name for p in result.written)[:2]  # doctest: +SKIP
['app.css', 'index.html']
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import shutil
import threading
import typing as typ

from ._constants import CSS_FILE_NAME
from .assets import (
    build_stylesheet,
    copy_image_dir,
    stylesheet_version,
    write_stylesheet,
)
from .concurrency import TaskGroup
from .discovery import discover_documents
from .docs_index import IndexPageBuilder, aggregate, create_index_menu
from .errors import BuildStateError
from .feed import FeedBuilder
from .generator import MarkdownRenderer, PageBuilder, PageContentGenerator
from .layout import load_layout
from .meta import CategoryIndex

if typ.TYPE_CHECKING:
    from concurrent.futures import Future
    from pathlib import Path

    from .config import SiteConfig
    from .generator.models import IndexItem, Page

logger = logging.getLogger(__name__)


class BuildState(enum.Enum):
    """Lifecycle of a :class:`SiteBuilder`."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dc.dataclass(frozen=True, slots=True)
class BuildResult:
    """Artifacts of a finished build.

    Attributes
    ----------
    written : tuple[Path, ...]
        Files and directories written, pages first.
    pages : tuple[Page, ...]
        Page records in document order; empty in single-page mode.
    index_items : tuple[IndexItem, ...]
        Aggregated table of contents.
    """

    written: tuple[Path, ...]
    pages: tuple[Page, ...] = ()
    index_items: tuple[IndexItem, ...] = ()


def prepare_output_dir(config: SiteConfig) -> None:
    """Create the output directory, removing it first when ``clean`` is set.

    Raises
    ------
    BuildStateError
        If cleaning would remove the configuration directory or the sources.
    """
    output_dir = config.output_dir.resolve()
    if config.clean and output_dir.exists():
        protected = [config.source_dir.resolve()]
        if config.config_dir is not None:
            protected.append(config.config_dir.resolve())
        for path in protected:
            if output_dir == path or output_dir in path.parents:
                msg = f"Refusing to clean '{output_dir}': it contains '{path}'"
                raise BuildStateError(msg)
        logger.info("removing %s", output_dir)
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)


class SiteBuilder:
    """Run one build of a site described by a ``SiteConfig``."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        renderer: MarkdownRenderer | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Prepare a builder.

        Parameters
        ----------
        config : SiteConfig
            Build configuration.
        renderer : MarkdownRenderer, optional
            Renderer shared by all page tasks; one is created from ``config``
            when omitted.
        cancel_event : threading.Event, optional
            Setting it from another thread stops tasks that have not started.
        """
        self.config = config
        self.renderer = renderer or MarkdownRenderer(
            config.source_dir, pygments_style=config.pygments_style
        )
        self.cancel_event = cancel_event or threading.Event()
        self.state = BuildState.IDLE

    def run(self) -> BuildResult:
        """Build the site and return what was written.

        Raises
        ------
        BuildStateError
            If the builder has already run.
        BuildError
            The first error raised by any build task.
        """
        if self.state is not BuildState.IDLE:
            msg = f"SiteBuilder cannot run from state '{self.state.value}'"
            raise BuildStateError(msg)
        self.state = BuildState.RUNNING
        try:
            result = self._run()
        except BaseException:
            self.state = BuildState.FAILED
            raise
        self.state = BuildState.SUCCEEDED
        return result

    def _run(self) -> BuildResult:
        config = self.config
        prepare_output_dir(config)
        documents = discover_documents(config.source_dir, config.suffix)

        pages: list[Page] = []
        if not config.single_page:
            pages = self._collect_pages(documents)
        items = aggregate(pages)
        index_menu = create_index_menu(items) if not config.single_page else ""

        css = build_stylesheet(self.renderer.stylesheet)
        css_path = f"{config.base_url}/{CSS_FILE_NAME}?v={stylesheet_version(css)}"

        logger.info("rendering %d pages", len(documents))
        generator = PageContentGenerator(
            self.renderer,
            layout=load_layout(config.page_layout, "page.html"),
            source_dir=config.source_dir,
            output_dir=config.output_dir,
            base_url=config.base_url,
            css_path=css_path,
            index_menu=index_menu,
        )
        futures: list[Future[Path | None]] = []
        with TaskGroup(config.max_workers, self.cancel_event) as group:
            futures.extend(group.spawn(generator.run, path) for path in documents)
            if not config.single_page:
                futures.append(group.spawn(self._index_builder(css_path).run, items))
            if config.rss:
                futures.append(group.spawn(self._feed_builder().build, pages))
            futures.append(group.spawn(write_stylesheet, config.output_dir, css))
            futures.append(
                group.spawn(copy_image_dir, config.source_dir, config.output_dir)
            )

        written = tuple(path for f in futures if (path := f.result()) is not None)
        logger.info("build finished: %d artifacts", len(written))
        return BuildResult(written=written, pages=tuple(pages), index_items=tuple(items))

    def _collect_pages(self, documents: list[Path]) -> list[Page]:
        """Build every page record concurrently, keeping document order."""
        logger.info("reading metadata of %d documents", len(documents))
        page_builder = PageBuilder(
            self.config.source_dir,
            self.config.base_url,
            CategoryIndex(self.config.categories),
        )
        slots: list[Page | None] = [None] * len(documents)

        def build_into(index: int, path: Path) -> None:
            slots[index] = page_builder.build(path)

        with TaskGroup(self.config.max_workers, self.cancel_event) as group:
            for index, path in enumerate(documents):
                group.spawn(build_into, index, path)
        return [page for page in slots if page is not None]

    def _index_builder(self, css_path: str) -> IndexPageBuilder:
        index_page = self.config.index_page
        return IndexPageBuilder(
            self.renderer,
            layout=load_layout(index_page.layout, "index.html"),
            output_dir=self.config.output_dir,
            base_url=self.config.base_url,
            css_path=css_path,
            header=index_page.header,
            title=index_page.title,
            description=index_page.description,
        )

    def _feed_builder(self) -> FeedBuilder:
        return FeedBuilder(
            time_zone=self.config.time_zone,
            output_dir=self.config.output_dir,
            base_url=self.config.base_url,
            title=self.config.index_page.title,
            description=self.config.index_page.description,
        )


__all__ = ["BuildResult", "BuildState", "SiteBuilder", "prepare_output_dir"]
