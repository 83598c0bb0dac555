"""Main Change Case application."""

from __future__ import annotations

import shlex
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, OptionList, Static
from textual.widgets.option_list import Option

from . import platform
from .cases import CASES, convert, preference_key
from .content import NoTextError, read_content
from .log import logger
from .memory import CaseMemory
from .persistence import CaseListStore, KeyValueCache
from .preferences import (
    Preferences,
    load_preferences,
    prefs_path,
    save_action,
    save_case_enabled,
    save_source,
)

PINNED = "pinned"
RECENT = "recent"
ALL = "all"

_SECTION_TITLES = {PINNED: "Pinned", RECENT: "Recent", ALL: "All Cases"}
_PREVIEW_WIDTH = 40


@dataclass
class CaseResult:
    """What the user picked before the app exited."""

    action: str  # "copy" or "paste"
    case: str
    text: str


def quicklink_command(case: str) -> str:
    """Shell command that converts straight to *case* without the list."""
    return f"change-case --case {shlex.quote(case)}"


def _preview(text: str) -> str:
    first = text.split("\n", 1)[0]
    if len(first) > _PREVIEW_WIDTH or "\n" in text:
        return first[:_PREVIEW_WIDTH] + "…"
    return first


class ChangeCaseApp(App[CaseResult]):
    """Pick a case for the clipboard or selected text."""

    CSS_PATH = "styles.tcss"
    TITLE = "Change Case"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+v", "secondary", "Other action", show=True),
        Binding("ctrl+p", "pin", "Pin", show=True),
        Binding("ctrl+r", "remove", "Remove", show=True),
        Binding("ctrl+x", "clear", "Clear section", show=True),
        Binding("ctrl+l", "quicklink", "Quicklink", show=True),
        Binding("ctrl+d", "hide_case", "Hide case", show=True),
        Binding("ctrl+t", "toggle_action", "Swap Enter action", show=True),
        Binding("ctrl+o", "toggle_source", "Switch source", show=True),
        Binding("escape", "quit", "Quit", show=False),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        prefs: Preferences | None = None,
        memory: CaseMemory | None = None,
        read_text: Callable[[], str] | None = None,
        copy_text: Callable[[str], bool] | None = None,
        prefs_file: Path | None = None,
    ) -> None:
        super().__init__()
        self._prefs_file = prefs_file or prefs_path()
        self.prefs = prefs or load_preferences(self._prefs_file)
        self.memory = memory if memory is not None else CaseMemory()
        self._read_text = read_text or (lambda: read_content(self.prefs.source))
        self._copy_text = copy_text or platform.copy_to_clipboard
        self.content = ""
        self._sections: dict[str, str] = {}
        # One conversion per case and content, so Random Case stays stable
        self._converted: dict[str, str] = {}

    # ── Layout ──────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        with Horizontal(id="main-container"):
            yield OptionList(id="case-list")
            yield Static(id="case-detail")
        yield Footer()

    def on_mount(self) -> None:
        self._load_content()
        self._refresh_list()
        self.query_one("#case-list", OptionList).focus()

    def _load_content(self) -> None:
        self._converted = {}
        try:
            self.content = self._read_text()
        except NoTextError:
            self.content = ""
            self.notify(
                "Please ensure that text is either selected or copied",
                title="Nothing to convert",
                severity="error",
            )

    # ── List building ───────────────────────────────────────────

    def _section_cases(self) -> list[tuple[str, list[str]]]:
        enabled = self.prefs.enabled_cases()
        # Stored lists may name cases this version no longer knows
        return [
            (PINNED, [c for c in self.memory.pinned if c in CASES]),
            (RECENT, [c for c in self.memory.recent if c in CASES]),
            (ALL, self.memory.remaining(enabled)),
        ]

    def _refresh_list(self, keep: str | None = None) -> None:
        """Rebuild the three sections, keeping *keep* highlighted if present."""
        option_list = self.query_one("#case-list", OptionList)
        option_list.clear_options()
        self._sections = {}
        for section, cases in self._section_cases():
            if not cases:
                continue
            option_list.add_option(
                Option(
                    Text(_SECTION_TITLES[section], style="bold"),
                    id=f"section:{section}",
                    disabled=True,
                )
            )
            for case in cases:
                self._sections[case] = section
                prompt = Text(case)
                prompt.append(f"  {_preview(self.converted(case))}", style="dim")
                option_list.add_option(Option(prompt, id=case))

        target = keep if keep in self._sections else None
        if target is None and self._sections:
            target = next(iter(self._sections))
        if target is not None:
            option_list.highlighted = option_list.get_option_index(target)
        self._show_detail(target)
        self.refresh_bindings()

    def _show_detail(self, case: str | None) -> None:
        detail = self.query_one("#case-detail", Static)
        detail.update(Text(self.converted(case)) if case else "")

    def converted(self, case: str) -> str:
        """The content in *case*, converted once until the content changes."""
        if case not in self._converted:
            self._converted[case] = convert(self.content, case)
        return self._converted[case]

    def current_case(self) -> str | None:
        if not self._sections:
            return None
        option_list = self.query_one("#case-list", OptionList)
        if option_list.highlighted is None:
            return None
        option = option_list.get_option_at_index(option_list.highlighted)
        if option.id is None or option.id not in self._sections:
            return None
        return option.id

    def current_section(self) -> str | None:
        case = self.current_case()
        return self._sections.get(case) if case else None

    # ── Events ──────────────────────────────────────────────────

    def on_option_list_option_highlighted(
        self, event: OptionList.OptionHighlighted
    ) -> None:
        self._show_detail(event.option.id if event.option.id in self._sections else None)
        self.refresh_bindings()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option.id in self._sections:
            self._finish(self.prefs.action, event.option.id)

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        section = self.current_section()
        if action == "pin":
            return section is not None and section != PINNED
        if action in ("remove", "clear"):
            return section in (PINNED, RECENT)
        if action == "hide_case":
            return section == ALL
        return True

    # ── Actions ─────────────────────────────────────────────────

    def _finish(self, action: str, case: str) -> None:
        if not self.content:
            self.notify("Nothing to convert", severity="error")
            return
        self.memory.use(case)
        logger.info("%s %s", action, case)
        self.exit(CaseResult(action=action, case=case, text=self.converted(case)))

    def action_secondary(self) -> None:
        case = self.current_case()
        if case is None:
            return
        other = "paste" if self.prefs.action == "copy" else "copy"
        self._finish(other, case)

    def action_pin(self) -> None:
        case = self.current_case()
        if case is None:
            return
        self.memory.pin(case)
        self._refresh_list(keep=case)
        self.notify(f"Pinned {case}")

    def action_remove(self) -> None:
        case = self.current_case()
        section = self.current_section()
        if case is None:
            return
        if section == PINNED:
            self.memory.unpin(case)
            self.notify(f"Removed pinned case {case}")
        elif section == RECENT:
            self.memory.remove_recent(case)
            self.notify(f"Removed recent case {case}")
        else:
            return
        self._refresh_list(keep=case)

    def action_clear(self) -> None:
        section = self.current_section()
        if section == PINNED:
            self.memory.clear_pinned()
            self.notify("Cleared pinned cases")
        elif section == RECENT:
            self.memory.clear_recent()
            self.notify("Cleared recent cases")
        else:
            return
        self._refresh_list(keep=self.current_case())

    def action_quicklink(self) -> None:
        case = self.current_case()
        if case is None:
            return
        command = quicklink_command(case)
        if self._copy_text(command):
            self.notify(command, title="Quicklink copied")
        else:
            self.notify(command, title="Could not copy quicklink", severity="warning")

    # ── Preferences ─────────────────────────────────────────────

    def action_hide_case(self) -> None:
        """Drop the highlighted case from 'All Cases' and remember that."""
        case = self.current_case()
        if case is None or self.current_section() != ALL:
            return
        self.prefs.cases[preference_key(case)] = False
        save_case_enabled(case, False, self._prefs_file)
        self._refresh_list()
        self.notify(f"Hid {case}")

    def action_toggle_action(self) -> None:
        self.prefs.action = "paste" if self.prefs.action == "copy" else "copy"
        save_action(self.prefs.action, self._prefs_file)
        self.notify(f"Enter now does {self.prefs.action}")

    def action_toggle_source(self) -> None:
        current = self.prefs.source
        self.prefs.source = "selection" if current == "clipboard" else "clipboard"
        save_source(self.prefs.source, self._prefs_file)
        self._load_content()
        self._refresh_list(keep=self.current_case())
        self.notify(f"Reading the {self.prefs.source} first")


def load_memory() -> CaseMemory:
    """Load pinned and recent cases from the default cache file."""
    cache = KeyValueCache(platform.app_file("cache.json"))
    return CaseMemory.load(CaseListStore(cache))


def run_app(prefs: Preferences | None = None) -> int:
    """Run the Change Case list, then copy or paste the chosen result."""
    app = ChangeCaseApp(prefs=prefs, memory=load_memory())
    result = app.run()
    if result is None:
        return 0
    # Pasting goes through the clipboard, so both actions copy first
    if not platform.copy_to_clipboard(result.text):
        print("Could not copy to the clipboard", file=sys.stderr)
        return 1
    if result.action != "paste":
        print("Copied to Clipboard")
    elif platform.send_paste_keystroke():
        print(f"Pasted {result.case}")
    else:
        print(f"Copied {result.case} (no paste tool found)")
    return 0
