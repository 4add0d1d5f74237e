"""
Viewer Shell
============
Takes the first command-line argument, checks that it names a readable file,
and puts either the image or a "not found" notice on the display surface.

State only moves forward: IDLE -> CHECKING -> DISPLAYED | NOT_FOUND.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Optional, Sequence

from .surface import DisplaySurface, Environment

logger = logging.getLogger(__name__)


# =============================================================================
# Types
# =============================================================================

class ViewerMode(Enum):
    """Scaling hint attached to the image for the page's CSS rules."""

    FITDOWN = "fitdown"
    FIT = "fit"
    ZOOM = "zoom"

    @classmethod
    def parse(cls, value: str) -> "ViewerMode":
        try:
            return cls(value.lower())
        except ValueError:
            accepted = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown mode '{value}'. Use: {accepted}") from None

    def __str__(self):
        return self.value


DEFAULT_MODE = ViewerMode.FITDOWN


class ShellState(Enum):
    IDLE = "idle"
    CHECKING = "checking"
    DISPLAYED = "displayed"
    NOT_FOUND = "not_found"


class TargetKind(Enum):
    IMAGE = "image"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class DisplayTarget:
    kind: TargetKind
    path: Optional[str] = None

    @classmethod
    def image(cls, path: str) -> "DisplayTarget":
        return cls(TargetKind.IMAGE, path)

    @classmethod
    def not_found(cls, path: Optional[str] = None) -> "DisplayTarget":
        return cls(TargetKind.NOT_FOUND, path)

    @property
    def url(self) -> Optional[str]:
        if self.kind is TargetKind.IMAGE:
            return file_url(self.path)
        return None

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "path": self.path, "url": self.url}


# =============================================================================
# Helpers
# =============================================================================

def file_url(path: str) -> str:
    """Map a local path to an absolute, percent-encoded file:// URL."""
    return Path(os.path.abspath(path)).as_uri()


def file_available(path: str) -> bool:
    """True if ``path`` is a regular file this process can read.

    Missing files, directories and permission errors all count as unavailable.
    """
    try:
        return os.path.isfile(path) and os.access(path, os.R_OK)
    except (OSError, ValueError):
        return False


async def check_exists(path: str) -> bool:
    return await asyncio.to_thread(file_available, path)


ExistenceCheck = Callable[[str], Awaitable[bool]]


# =============================================================================
# Shell
# =============================================================================

class ViewerShell:
    """Resolve one path and render it exactly once."""

    def __init__(
        self,
        surface: DisplaySurface,
        mode: ViewerMode = DEFAULT_MODE,
        check: ExistenceCheck = check_exists,
    ):
        self.surface = surface
        self.mode = mode
        self.check = check
        self.state = ShellState.IDLE
        self.target: Optional[DisplayTarget] = None
        self._pending: Optional[asyncio.Future] = None

    @classmethod
    def from_environment(cls, env: Environment, **kwargs) -> "ViewerShell":
        return cls(env.surface, **kwargs)

    async def start(self, argv: Sequence[str], mode: Optional[ViewerMode] = None):
        if self.target is not None:
            logger.debug(f"Shell already {self.state.value}, ignoring start")
            return self.target
        if self._pending is not None:
            # A check is in flight; share its outcome.
            return await self._pending

        if mode is not None:
            self.mode = mode
        self.state = ShellState.CHECKING
        self._pending = asyncio.ensure_future(self._resolve(argv))
        return await self._pending

    async def _resolve(self, argv: Sequence[str]) -> DisplayTarget:
        path = argv[0] if argv else None
        if not path:
            logger.warning("No file given on the command line")
            return self.on_existence_checked(None, False)

        exists = await self.check(path)
        return self.on_existence_checked(path, exists)

    def on_existence_checked(self, path: Optional[str], exists: bool) -> DisplayTarget:
        if exists:
            target = DisplayTarget.image(path)
        else:
            if path:
                logger.warning(f"File not available: {path}")
            target = DisplayTarget.not_found(path)
        self.render(target, self.mode)
        return target

    def render(self, target: DisplayTarget, mode: ViewerMode):
        if self.target is not None:
            logger.debug("Render skipped, surface already holds a target")
            return

        if target.kind is TargetKind.IMAGE:
            url = target.url
            self.surface.show_image(url, str(mode))
            self.state = ShellState.DISPLAYED
            logger.info(f"Displaying {url} ({mode})")
        else:
            self.surface.show_not_found()
            self.state = ShellState.NOT_FOUND
        self.target = target

    async def launch(self, env: Environment):
        """Start from the environment's own argument vector."""
        return await self.start(env.argv())

    def status(self) -> dict:
        return {
            "state": self.state.value,
            "mode": str(self.mode),
            "target": self.target.to_dict() if self.target else None,
        }
