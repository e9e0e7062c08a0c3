"""Grammar engine boundary and the ANTLR 3 tool implementation."""

from .options import MESSAGE_FORMATS, ToolOptions
from .base import EngineBinding, EngineResult, GrammarEngine
from .tool import AntlrToolEngine, count_messages

__all__ = [
    "MESSAGE_FORMATS",
    "ToolOptions",
    "EngineBinding",
    "EngineResult",
    "GrammarEngine",
    "AntlrToolEngine",
    "count_messages",
]
