"""Show one image, named on the command line, in a browser window."""

from .shell import DisplayTarget, ShellState, TargetKind, ViewerMode, ViewerShell, file_url
from .surface import HostEnvironment, HtmlSurface, SurfaceAlreadyRendered

__version__ = "0.1.0"
