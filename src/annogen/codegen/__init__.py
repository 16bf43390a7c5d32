from annogen.codegen.registry import GenerationContext
from annogen.codegen.writer import WriteReport, include_line, render_file, write_files

__all__ = [
    "GenerationContext",
    "WriteReport",
    "include_line",
    "render_file",
    "write_files",
]
