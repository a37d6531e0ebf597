from __future__ import annotations


class CfgEditError(Exception):
    pass


class ParseError(CfgEditError):
    """The bytes on disk are not a well-formed JSON document."""


class DocumentIOError(CfgEditError):
    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path
