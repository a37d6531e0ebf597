from __future__ import annotations

import enum, logging
from pathlib import Path
from typing import Any, Iterable, List, Optional

from .errors import CfgEditError, DocumentIOError, ParseError
from .host import WidgetHost
from .projection import render_document
from .values import FormatConfig, NodeRef, parse, serialize

logger = logging.getLogger(__name__)

OPEN_PROMPT = "Open a .json file to edit it."
PARSE_ERROR_TEXT = "Parse error."
OPEN_HINT = "Open a .json file (Ctrl+O). Stands in for dropping files on the window:\nonly the first selected file is opened."


class DocumentState(enum.Enum):
    EMPTY = "empty"
    LOADED = "loaded"
    PARSE_ERROR = "parse_error"
    IO_ERROR = "io_error"


class DocumentSession:
    """Owns the open file's path and value tree and drives one frame at a time."""

    def __init__(self, format_config: Optional[FormatConfig] = None):
        self.format_config = format_config or FormatConfig()
        self.path = ""
        self.state = DocumentState.EMPTY
        self.error: Optional[CfgEditError] = None
        self.modified = False
        self._root: List[Any] = [None]

    # ---- state ----
    @property
    def root(self) -> Any:
        return self._root[0]

    @property
    def parse_error(self) -> bool:
        return self.state is DocumentState.PARSE_ERROR

    @property
    def loaded(self) -> bool:
        return self.state is DocumentState.LOADED

    def root_ref(self) -> NodeRef:
        return NodeRef(self._root, 0)

    # ---- lifecycle ----
    def open(self, path) -> bool:
        path = str(path)
        self.path = path
        self.modified = False
        try:
            data = Path(path).read_bytes()
        except OSError as ex:
            logger.warning("Cannot read %s: %s", path, ex)
            self._fail(DocumentState.IO_ERROR, DocumentIOError(path, f"Cannot read {path}: {ex.strerror or ex}"))
            return False
        try:
            root = parse(data)
        except ParseError as ex:
            logger.warning("Parse error in %s: %s", path, ex.__cause__ or ex)
            self._fail(DocumentState.PARSE_ERROR, ex)
            return False
        self._root = [root]
        self.state = DocumentState.LOADED
        self.error = None
        logger.info("Loaded %s", path)
        return True

    def _fail(self, state: DocumentState, error: CfgEditError) -> None:
        self._root = [None]
        self.state = state
        self.error = error

    def open_first(self, paths: Iterable) -> bool:
        for p in paths:
            return self.open(p)
        return False

    def save(self) -> bool:
        if not self.path or self.state is not DocumentState.LOADED:
            return False
        try:
            data = serialize(self.root, self.format_config)
        except ValueError as ex:
            logger.error("Cannot serialize %s: %s", self.path, ex)
            self.error = DocumentIOError(self.path, f"Cannot serialize {self.path}: {ex}")
            return False
        try:
            with open(self.path, "wb") as f:
                f.write(data)
        except OSError as ex:
            # no dialog here; the shell reads self.error
            logger.error("Cannot write %s: %s", self.path, ex)
            self.error = DocumentIOError(self.path, f"Cannot write {self.path}: {ex.strerror or ex}")
            return False
        self.error = None
        self.modified = False
        logger.info("Saved %s", self.path)
        return True

    def reload(self) -> bool:
        if not self.path:
            return False
        return self.open(self.path)

    def close(self) -> None:
        if self.path:
            logger.info("Closed %s", self.path)
        self.path = ""
        self._root = [None]
        self.state = DocumentState.EMPTY
        self.error = None
        self.modified = False

    # ---- frame ----
    def render_frame(self, host: WidgetHost) -> None:
        if self.state is DocumentState.PARSE_ERROR:
            host.text(PARSE_ERROR_TEXT)
            self._error_frame(host)
        elif self.state is DocumentState.IO_ERROR:
            host.text(str(self.error))
            self._error_frame(host)
        elif self.state is DocumentState.EMPTY:
            host.text(OPEN_PROMPT)
        else:
            save = host.button("Save")
            reload = host.button("Reload")
            close = host.button("Close")
            if save: self.save()
            if reload: self.reload()
            if close: self.close()
            if self.state is DocumentState.LOADED:
                if render_document(self.root_ref(), host):
                    self.modified = True

    def _error_frame(self, host: WidgetHost) -> None:
        host.text(OPEN_PROMPT)
        if host.button("Reload"):
            self.reload()
