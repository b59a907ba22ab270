"""
Shared test infrastructure.

Modules:
- file_utils: creating files and directories
- cli_utils: running the CLI in a subprocess
- stub_host: in-memory stand-ins for the host collaborators
"""

from .cli_utils import jload, run_cli
from .file_utils import write
from .stub_host import (
    MemoryDoc,
    MemorySettingsStore,
    MemoryStore,
    StubRenderer,
    build_blocks,
    parse_inline,
    render_document,
)

__all__ = [
    "write",
    "run_cli",
    "jload",
    "MemoryDoc",
    "MemoryStore",
    "MemorySettingsStore",
    "StubRenderer",
    "build_blocks",
    "parse_inline",
    "render_document",
]
