# =============================================================================
# web/supervisor.py  —  Tool-server process registry
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Starts MCP tool servers as child processes, relays their stderr/stdout
#   into our log (one line at a time, prefixed with "[name]"), and shuts
#   them down cleanly.
#
# OWNERSHIP:
#   The registry is an ordinary object owned by whoever starts it (the web
#   app's lifespan).  There is no module-level process table.
#
# SHUTDOWN, per server:
#   1. close stdin (an MCP stdio server exits on EOF)
#   2. terminate, then wait up to `grace` seconds
#   3. kill if it is still running
# =============================================================================

import asyncio
import logging
import sys
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_GRACE_SECONDS = 5.0


@dataclass(frozen=True)
class ToolServerSpec:
    name: str
    command: tuple[str, ...]
    cwd: Optional[str] = None


@dataclass
class _Running:
    spec: ToolServerSpec
    process: asyncio.subprocess.Process
    pumps: list[asyncio.Task] = field(default_factory=list)


def default_specs() -> list[ToolServerSpec]:
    """The bundled travel tool server, run with this interpreter."""
    return [
        ToolServerSpec(
            name="travel-orchestrator",
            command=(sys.executable, "-m", "tools.mcp_server"),
        ),
    ]


class ToolServerRegistry:
    """Supervises a fixed set of tool-server processes."""

    def __init__(self, specs: Optional[list[ToolServerSpec]] = None, grace: float = DEFAULT_GRACE_SECONDS):
        self.specs = list(specs) if specs is not None else default_specs()
        self.grace = grace
        self._running: dict[str, _Running] = {}

    @property
    def names(self) -> list[str]:
        """Servers currently running."""
        return [
            name for name, entry in self._running.items()
            if entry.process.returncode is None
        ]

    async def start(self) -> None:
        for spec in self.specs:
            if spec.name in self._running:
                continue
            logger.info("Starting %s...", spec.name)
            try:
                process = await asyncio.create_subprocess_exec(
                    *spec.command,
                    stdin=asyncio.subprocess.PIPE,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    cwd=spec.cwd,
                )
            except OSError as exc:
                logger.error("Could not start %s: %s", spec.name, exc)
                continue

            entry = _Running(spec=spec, process=process)
            entry.pumps = [
                asyncio.create_task(_relay(spec.name, process.stdout)),
                asyncio.create_task(_relay(spec.name, process.stderr)),
            ]
            self._running[spec.name] = entry

    async def stop(self) -> None:
        entries = list(self._running.values())
        self._running.clear()
        await asyncio.gather(*(self._stop_one(entry) for entry in entries))

    async def _stop_one(self, entry: _Running) -> None:
        process = entry.process
        name = entry.spec.name

        if process.returncode is None:
            if process.stdin is not None and not process.stdin.is_closing():
                process.stdin.close()
            try:
                process.terminate()
            except ProcessLookupError:
                pass
            try:
                await asyncio.wait_for(process.wait(), self.grace)
            except asyncio.TimeoutError:
                logger.warning("%s did not exit within %gs; killing it", name, self.grace)
                process.kill()
                await process.wait()

        # The relays finish once the pipes reach EOF.
        await asyncio.gather(*entry.pumps, return_exceptions=True)
        logger.info("[%s] Process exited with code %s", name, process.returncode)

    async def __aenter__(self) -> "ToolServerRegistry":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()


async def _relay(name: str, stream: Optional[asyncio.StreamReader]) -> None:
    if stream is None:
        return
    while True:
        line = await stream.readline()
        if not line:
            return
        text = line.decode(errors="replace").rstrip()
        if text:
            logger.info("[%s] %s", name, text)
