"""
Display Surfaces
================
The region of the page the shell writes into. A surface takes exactly one
element per run: either the image or the "not found" notice.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence

from markupsafe import Markup

logger = logging.getLogger(__name__)

VIEWER_ID = "viewer"
NOT_FOUND_TEXT = "File does not exist"


class SurfaceAlreadyRendered(RuntimeError):
    """Raised when something tries to append a second element to a surface."""


class DisplaySurface(Protocol):
    def show_image(self, url: str, mode: str) -> None: ...

    def show_not_found(self) -> None: ...


@dataclass(frozen=True)
class Element:
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    text: str = ""


class HtmlSurface:
    """Records the single element appended to the ``#viewer`` region."""

    def __init__(self, region_id: str = VIEWER_ID):
        self.region_id = region_id
        self.elements: List[Element] = []

    @property
    def element(self) -> Optional[Element]:
        return self.elements[0] if self.elements else None

    def show_image(self, url: str, mode: str) -> None:
        self._append(Element("img", {"src": url, "data-mode": mode}))

    def show_not_found(self) -> None:
        self._append(Element("p", text=NOT_FOUND_TEXT))

    def _append(self, element: Element):
        if self.elements:
            raise SurfaceAlreadyRendered(
                f"#{self.region_id} already holds a <{self.elements[0].tag}>"
            )
        self.elements.append(element)
        logger.debug(f"Appended <{element.tag}> to #{self.region_id}")

    def html(self, src_override: Optional[str] = None) -> Markup:
        """Render the region contents as escaped HTML.

        ``src_override`` replaces the ``src`` of an image element; the original
        file URL is then kept in ``data-file-url``. Pages served over HTTP
        cannot load ``file://`` URLs directly.
        """
        element = self.element
        if element is None:
            return Markup("")

        attrs = dict(element.attrs)
        if src_override is not None and "src" in attrs:
            attrs["data-file-url"] = attrs["src"]
            attrs["src"] = src_override

        rendered = "".join(
            Markup(' {}="{}"').format(Markup(name), value)
            for name, value in attrs.items()
        )
        if element.tag == "img":
            return Markup("<img{} />").format(Markup(rendered))
        return Markup("<{0}{1}>{2}</{0}>").format(
            Markup(element.tag), Markup(rendered), element.text
        )


class Environment(Protocol):
    """What the shell needs from its host: the arguments and a surface."""

    surface: DisplaySurface

    def argv(self) -> Sequence[str]: ...


class HostEnvironment:
    """Environment backed by the process command line."""

    def __init__(self, args: Sequence[str], surface: Optional[HtmlSurface] = None):
        self._args = list(args)
        self.surface = surface if surface is not None else HtmlSurface()

    def argv(self) -> Sequence[str]:
        return list(self._args)
