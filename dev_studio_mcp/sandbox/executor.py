"""
Runs a project file's JavaScript in an embedded QuickJS engine.

The file body is compiled with `new Function('console', 'require', source)`,
so it sees only the capturing `console`, an allow-listed `require` and the
ECMAScript globals. There is no DOM and no Node.js runtime: `process`, `fs`
and friends do not exist.

Every run gets a fresh engine context with a time and memory limit. The
engine isolates crashes and runaway scripts; it is not a hardened security
boundary.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import quickjs

logger = logging.getLogger(__name__)

# Module values must be JSON-serializable; they are copied into the engine.
DEFAULT_MODULES: dict[str, Any] = {
    "react": "React",
    "react-dom": "ReactDOM",
}

DEFAULT_TIME_LIMIT_SECONDS = 2.0
DEFAULT_MEMORY_LIMIT_BYTES = 32 * 1024 * 1024

RUNTIME_JS = """
var __output = [];
var __error = null;
var __modules = %(modules)s;

function __format(value) {
  if (typeof value === 'string') return value;
  if (value === undefined) return 'undefined';
  if (typeof value === 'function' || typeof value === 'symbol') return String(value);
  if (value instanceof Error) return value.name + ': ' + value.message;
  try {
    var text = JSON.stringify(value);
    return text === undefined ? String(value) : text;
  } catch (e) {
    return String(value);
  }
}

function __log() {
  __output.push(Array.prototype.map.call(arguments, __format).join(' '));
}

var __console = { log: __log, info: __log, warn: __log, error: __log, debug: __log };

function __require(name) {
  if (!Object.prototype.hasOwnProperty.call(__modules, name)) {
    throw new Error('Module not found: ' + name);
  }
  return __modules[name];
}

function __run(source) {
  try {
    new Function('console', 'require', source)(__console, __require);
  } catch (e) {
    var message = e instanceof Error ? (e.message || e.name) : String(e);
    __error = 'Error: ' + message;
  }
}
"""

STATE_JS = "JSON.stringify({output: __output.join('\\n'), error: __error})"


@dataclass
class SandboxResult:
    """Captured outcome of one sandboxed run."""

    output: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SandboxExecutor:
    """Executes JavaScript with only `console` and an allow-listed `require` exposed."""

    def __init__(
        self,
        modules: Mapping[str, Any] | None = None,
        time_limit: float = DEFAULT_TIME_LIMIT_SECONDS,
        memory_limit: int = DEFAULT_MEMORY_LIMIT_BYTES,
    ) -> None:
        self._modules = dict(DEFAULT_MODULES if modules is None else modules)
        self._runtime = RUNTIME_JS % {"modules": json.dumps(self._modules)}
        self.time_limit = time_limit
        self.memory_limit = memory_limit

    @property
    def allowed_modules(self) -> list[str]:
        return sorted(self._modules)

    def run(self, script_text: str, filename: str = "<sandbox>") -> SandboxResult:
        """
        Run `script_text` and capture what it logs.

        Args:
            script_text: JavaScript source, executed as a function body.
            filename: Name used in log records.

        Returns:
            A SandboxResult with the captured output and, if the script failed,
            the captured error text. Never raises.
        """
        context = quickjs.Context()
        context.set_time_limit(self.time_limit)
        context.set_memory_limit(self.memory_limit)
        try:
            context.eval(self._runtime)
            context.eval(f"__run({json.dumps(script_text)})")
        except quickjs.JSException as e:
            # Interrupts and out-of-memory conditions cannot be caught inside the script.
            logger.debug(f"Sandbox engine fault in {filename}: {e}")
            return SandboxResult(output=self._read_state(context)["output"], error=f"Error: {e}")

        state = self._read_state(context)
        if state["error"] is not None:
            logger.debug(f"Sandbox fault in {filename}: {state['error']}")
        return SandboxResult(output=state["output"], error=state["error"])

    def _read_state(self, context: quickjs.Context) -> dict[str, Any]:
        try:
            return json.loads(context.eval(STATE_JS))
        except quickjs.JSException as e:
            logger.warning(f"Could not read sandbox output: {e}")
            return {"output": "", "error": None}
