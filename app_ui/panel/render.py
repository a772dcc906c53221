from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

HEADER_TEXT = "Workspaces"
PLACEHOLDER_TEXT = "(no workspaces)"
CURRENT_GLYPH = "▶ "
ENTRY_INDENT = "  "

LINE_HEADER = "header"
LINE_CURRENT = "current"
LINE_ENTRY = "entry"
LINE_PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class PanelSnapshot:
    names: Tuple[str, ...] = ()
    current: Optional[str] = None

    @classmethod
    def of(cls, names: Iterable[str], current: Optional[str]) -> "PanelSnapshot":
        return cls(names=tuple(names), current=current)


@dataclass(frozen=True)
class PanelLine:
    text: str
    kind: str
    name: Optional[str] = None

    @property
    def activatable(self) -> bool:
        return self.kind == LINE_ENTRY


@dataclass(frozen=True)
class RenderedPanel:
    snapshot: PanelSnapshot
    lines: Tuple[PanelLine, ...]

    def name_at(self, line: int) -> Optional[str]:
        """Workspace name recorded for ``line`` at render time, if any."""
        if line < 0 or line >= len(self.lines):
            return None
        return self.lines[line].name

    def entry_lines(self) -> Tuple[PanelLine, ...]:
        return tuple(line for line in self.lines if line.name is not None)

    def texts(self) -> Tuple[str, ...]:
        return tuple(line.text for line in self.lines)


def render(snapshot: PanelSnapshot) -> RenderedPanel:
    lines = [PanelLine(HEADER_TEXT, LINE_HEADER)]
    if not snapshot.names:
        lines.append(PanelLine(PLACEHOLDER_TEXT, LINE_PLACEHOLDER))
        return RenderedPanel(snapshot=snapshot, lines=tuple(lines))
    for name in snapshot.names:
        if name == snapshot.current:
            lines.append(PanelLine(f"{CURRENT_GLYPH}{name}", LINE_CURRENT, name))
        else:
            lines.append(PanelLine(f"{ENTRY_INDENT}{name}", LINE_ENTRY, name))
    return RenderedPanel(snapshot=snapshot, lines=tuple(lines))
