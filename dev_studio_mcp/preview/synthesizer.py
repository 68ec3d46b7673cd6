"""
Live Preview Synthesizer

Merges a project's files into one self-contained HTML document:
- every script file is rewritten to drop import/export syntax and concatenated,
  with the entry file appended last so its declarations can reference the rest
- every stylesheet is concatenated unchanged into one <style> block
- React, ReactDOM and Babel standalone are loaded from a CDN, so JSX is
  compiled in the page and no build step is needed
- runtime errors are rendered into a visible error panel instead of a blank page
"""

from __future__ import annotations

import json
import re

from dev_studio_mcp.models.project import Project, file_extension
from dev_studio_mcp.preview.module_rewriter import strip_module_syntax

SCRIPT_EXTENSIONS = {"js", "jsx"}
STYLE_EXTENSIONS = {"css"}

DEFAULT_ENTRY_FILE = "src/App.js"
DEFAULT_ENTRY_SYMBOL = "App"

# The document performs the mount itself, so project bootstrap files are left out.
BOOTSTRAP_FILES = frozenset({"src/index.js", "index.js"})

REACT_PRELUDE = (
    "const { useState, useEffect, useRef, useMemo, useCallback, useContext, "
    "useReducer, createContext, Fragment } = React;"
)


class PreviewSynthesizer:
    """Builds preview documents. Stateless: `synthesize` is a pure function of the project."""

    def __init__(
        self,
        entry_file: str = DEFAULT_ENTRY_FILE,
        entry_symbol: str = DEFAULT_ENTRY_SYMBOL,
    ) -> None:
        self.entry_file = entry_file
        self.entry_symbol = entry_symbol

    def synthesize(self, project: Project) -> str:
        """
        Render the project's current files as a complete HTML page.

        Args:
            project: The project snapshot to render.

        Returns:
            Complete HTML string
        """
        script = self.build_script(project)
        styles = self.build_styles(project)
        return _render_document(
            title=project.name or "Preview",
            styles=styles,
            script=script,
            entry_symbol=self.entry_symbol,
        )

    def build_script(self, project: Project) -> str:
        """Concatenate the rewritten script files, entry file last."""
        parts = []
        for path in sorted(project.files):
            if path == self.entry_file or path in BOOTSTRAP_FILES:
                continue
            if file_extension(path) in SCRIPT_EXTENSIONS:
                parts.append(_with_banner(path, strip_module_syntax(project.files[path].content)))

        entry = project.files.get(self.entry_file)
        if entry is not None:
            parts.append(_with_banner(self.entry_file, strip_module_syntax(entry.content)))
        return "\n\n".join(parts)

    def build_styles(self, project: Project) -> str:
        return "\n\n".join(
            project.files[path].content
            for path in sorted(project.files)
            if file_extension(path) in STYLE_EXTENSIONS
        )


def _with_banner(path: str, content: str) -> str:
    return f"// ---- {path} ----\n{content}"


def _escape_html(text: str) -> str:
    """HTML-escape text for safe embedding."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


# HTML closes raw-text blocks on the end tag in any letter case.
_SCRIPT_END = re.compile(r"</(script)", re.IGNORECASE)
_STYLE_END = re.compile(r"</(style)", re.IGNORECASE)


def _escape_script(text: str) -> str:
    return _SCRIPT_END.sub(r"<\\/\1", text)


def _escape_style(text: str) -> str:
    return _STYLE_END.sub(r"<\\/\1", text)


def _render_document(title: str, styles: str, script: str, entry_symbol: str) -> str:
    symbol_json = json.dumps(entry_symbol)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{_escape_html(title)}</title>
<script crossorigin src="https://unpkg.com/react@18/umd/react.development.js"></script>
<script crossorigin src="https://unpkg.com/react-dom@18/umd/react-dom.development.js"></script>
<script src="https://unpkg.com/@babel/standalone/babel.min.js"></script>
<style>
{PREVIEW_ERROR_CSS}
</style>
<style>
{_escape_style(styles)}
</style>
</head>
<body>
<div id="root"></div>
<div id="preview-error" style="display: none;"></div>
<script>
function showPreviewError(message) {{
  var panel = document.getElementById('preview-error');
  panel.textContent = String(message);
  panel.style.display = 'block';
}}
window.addEventListener('error', function (event) {{
  showPreviewError(event.error ? (event.error.stack || event.error.message) : event.message);
}});
window.addEventListener('unhandledrejection', function (event) {{
  showPreviewError(event.reason && event.reason.message ? event.reason.message : event.reason);
}});
</script>
<script type="text/babel" data-presets="env,react">
{REACT_PRELUDE}

try {{
{_escape_script(script)}

  if (typeof {entry_symbol} === 'undefined') {{
    throw new Error('Entry component ' + {symbol_json} + ' is not defined. Make sure the entry file declares it.');
  }}
  const previewRoot = ReactDOM.createRoot(document.getElementById('root'));
  previewRoot.render(React.createElement({entry_symbol}));
}} catch (error) {{
  showPreviewError(error && error.stack ? error.stack : error);
}}
</script>
</body>
</html>"""


PREVIEW_ERROR_CSS = """
#preview-error {
  position: fixed;
  left: 0;
  right: 0;
  bottom: 0;
  max-height: 50vh;
  overflow: auto;
  margin: 0;
  padding: 12px 16px;
  background: #2b0f0f;
  color: #ff8a80;
  font-family: Menlo, Monaco, Consolas, 'Courier New', monospace;
  font-size: 13px;
  white-space: pre-wrap;
  z-index: 2147483647;
}
"""
