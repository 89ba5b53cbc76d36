from __future__ import annotations

import os
from typing import TYPE_CHECKING

from filecat.file_manipulation import render_content
from filecat.logging import logger
from filecat.matching import normalize_path
from filecat.output_construction import build_header

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path
    from typing import TextIO

    from filecat.matching import ExclusionMatcher
    from filecat.settings import Settings


class FileCat:
    """One traversal session: walks the input paths and writes every file to a single sink.

    The session owns the running ``file_count``. Failures on a single entry are
    logged and never abort the walk. The file the run writes to is never read back.
    """

    def __init__(self, settings: Settings, matcher: ExclusionMatcher, sink: TextIO) -> None:
        self.settings = settings
        self.matcher = matcher
        self.sink = sink
        self.file_count = 0
        self.output = os.path.abspath(settings.output) if settings.output is not None else None

    def run(self, paths: Iterable[Path]) -> int:
        """Process every top-level entry in order and return the number of files written."""
        for path in paths:
            self.process_path(path)
        if self.settings.counter:
            logger.info("Total files processed: %d", self.file_count)
        return self.file_count

    def process_path(self, path: Path) -> None:
        if self.matcher.is_excluded(path):
            return
        if os.path.isdir(path):
            if self.settings.recursive:
                self.process_dir(path)
        elif os.path.isfile(path):
            self.process_file(path)
        else:
            logger.error("%s is not a valid file or directory", normalize_path(path))

    def process_dir(self, directory: Path) -> None:
        """Visit the children of ``directory`` in name order.

        Excluded children are skipped before anything else, so an excluded
        directory is never listed. Subdirectories are only entered when the
        run is recursive.
        """
        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.error("Failed to read directory %s: %s", normalize_path(directory), e)
            return

        for child in children:
            if self.matcher.is_excluded(child):
                continue
            if os.path.isfile(child):
                self.process_file(child)
            elif self.settings.recursive and os.path.isdir(child):
                self.process_dir(child)

    def is_output(self, path: Path) -> bool:
        """Whether ``path`` is the file this run writes to."""
        return self.output is not None and os.path.abspath(path) == self.output

    def process_file(self, file: Path) -> None:
        if self.is_output(file):
            return
        try:
            content = file.read_bytes()
        except OSError as e:
            logger.error("Failed to read file %s: %s", normalize_path(file), e)
            return

        display_path = normalize_path(file)
        self.sink.write(build_header(self.settings.header, display_path, color=self.settings.color))
        self.sink.write(render_content(content, self.settings))

        self.file_count += 1
        if self.settings.counter:
            logger.info("Files processed so far: %d", self.file_count)
