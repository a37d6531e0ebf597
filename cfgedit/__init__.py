from .colors import ColorShape, looks_like_color
from .errors import CfgEditError, DocumentIOError, ParseError
from .session import DocumentSession, DocumentState
from .values import parse, serialize

__version__ = "0.1.0"
