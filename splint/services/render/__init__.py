from .structured import compiler_span, render_json_line, render_structured
from .text import render_text

__all__ = ["compiler_span", "render_json_line", "render_structured", "render_text"]
