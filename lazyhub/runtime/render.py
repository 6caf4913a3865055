"""Frame rendering for the search screen.

Builds the whole frame as a list of ANSI-styled rows from immutable
snapshots; no terminal I/O happens here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..ansi import clip_ansi_line, sanitize_terminal_text
from ..directory.types import Repository, UserCandidate
from ..search.state import (
    INPUT_OWNER_QUERY,
    LOAD_FAILED,
    LOAD_LOADING,
    DependentLoadState,
    SearchSnapshot,
)

SPINNER_FRAMES: tuple[str, ...] = ("|", "/", "-", "\\")
TITLE = "\033[1;38;5;81mGitHub Repository Explorer\033[0m"
SUBTITLE = "\033[2;38;5;250mSearch for GitHub users and explore their repositories\033[0m"
KEYBOARD_HINTS = (
    "\033[2;38;5;250mUse \033[38;5;229m↑↓\033[2;38;5;250m to navigate, "
    "\033[38;5;229mEnter\033[2;38;5;250m to select, \033[38;5;229mEsc\033[2;38;5;250m to clear\033[0m"
)
QUERY_PLACEHOLDER = "Enter username to search..."


@dataclass(frozen=True)
class RenderContext:
    search: SearchSnapshot
    dependent: DependentLoadState
    selected: UserCandidate | None
    width: int
    height: int
    spinner_frame: int = 0
    cursor_visible: bool = True


@dataclass(frozen=True)
class RenderedFrame:
    lines: list[str]
    # 1-based screen row -> candidate index, for pointer hit-testing.
    candidate_rows: dict[int, int] = field(default_factory=dict)

    def text(self) -> str:
        return "\r\n".join(self.lines)


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def format_query_row(search: SearchSnapshot, spinner_frame: int, cursor_visible: bool) -> str:
    editing = search.input_owner == INPUT_OWNER_QUERY
    prompt = "\033[1;38;5;229m>\033[0m " if editing else "\033[2m>\033[0m "
    if search.query:
        body = sanitize_terminal_text(search.query)
    else:
        body = f"\033[2;38;5;244m{QUERY_PLACEHOLDER}\033[0m"
    cursor = "\033[7m \033[0m" if editing and cursor_visible else " "
    suffix = ""
    if search.loading:
        suffix = f"  \033[38;5;81m{SPINNER_FRAMES[spinner_frame % len(SPINNER_FRAMES)]} searching\033[0m"
    elif search.query:
        suffix = "  \033[2;38;5;250m(Ctrl+U clear)\033[0m"
    return prompt + body + cursor + suffix


def format_candidate_row(candidate: UserCandidate, *, focused: bool, selected: bool) -> str:
    marker = "\033[38;5;114m●\033[0m" if selected else " "
    details = f"\033[2;38;5;250m{candidate.public_repos} repos · {candidate.followers} followers\033[0m"
    if candidate.public_repos == 0 and candidate.followers == 0:
        details = f"\033[2;38;5;250m{sanitize_terminal_text(candidate.html_url)}\033[0m"
    row = f"{marker} {sanitize_terminal_text(candidate.label)}  {details}"
    return selected_with_ansi(row) if focused else row


def format_repository_row(repository: Repository) -> str:
    parts = [f"\033[1m{sanitize_terminal_text(repository.name)}\033[0m"]
    if repository.language:
        parts.append(f"\033[38;5;180m{sanitize_terminal_text(repository.language)}\033[0m")
    parts.append(f"★ {repository.stargazers_count}")
    parts.append(f"⑂ {repository.forks_count}")
    updated = repository.updated_date()
    if updated:
        parts.append(f"\033[2mUpdated {updated}\033[0m")
    return "  ".join(parts)


def _result_heading(count: int) -> str:
    noun = "user" if count == 1 else "users"
    return f"\033[1mSearch Results ({count} {noun} found)\033[0m"


def _dependent_rows(dependent: DependentLoadState, selected: UserCandidate) -> list[str]:
    login = sanitize_terminal_text(selected.login)
    if dependent.status == LOAD_LOADING:
        return [f"\033[38;5;81mLoading repositories for {login}...\033[0m"]
    if dependent.status == LOAD_FAILED:
        return [
            f"\033[1m{login}'s Repositories\033[0m",
            f"\033[31m{dependent.error_message or ''}\033[0m",
            "\033[2;38;5;250mPress r (with a result focused) or Ctrl+R to try again\033[0m",
        ]
    if not dependent.data:
        return [
            f"\033[1m{login}'s Repositories\033[0m",
            "\033[2mThis user has no public repositories.\033[0m",
        ]
    rows = [f"\033[1m{login}'s Repositories ({len(dependent.data)})\033[0m"]
    for repository in dependent.data:
        rows.append("  " + format_repository_row(repository))
        if repository.description:
            rows.append(f"    \033[2m{sanitize_terminal_text(repository.description)}\033[0m")
    return rows


def render_frame(context: RenderContext) -> RenderedFrame:
    """Lay out title, prompt, results and repository panel for one frame."""
    search = context.search
    lines: list[str] = [TITLE, SUBTITLE, ""]
    lines.append(format_query_row(search, context.spinner_frame, context.cursor_visible))
    if search.candidates:
        lines.append(KEYBOARD_HINTS)
    if search.error:
        lines.append(f"\033[31m{search.error}\033[0m")

    candidate_rows: dict[int, int] = {}
    if search.candidates:
        lines.append("")
        lines.append(_result_heading(len(search.candidates)))
        selected_id = context.selected.id if context.selected is not None else None
        for index, candidate in enumerate(search.candidates):
            lines.append(
                format_candidate_row(
                    candidate,
                    focused=index == search.focus_index,
                    selected=candidate.id == selected_id,
                )
            )
            candidate_rows[len(lines)] = index
    elif search.shows_no_results:
        lines.append("")
        lines.append(
            f'\033[2mNo users found for "{sanitize_terminal_text(search.query)}". Try a different search term.\033[0m'
        )

    if context.selected is not None:
        lines.append("")
        lines.extend(_dependent_rows(context.dependent, context.selected))

    height = max(1, context.height)
    clipped = [clip_ansi_line(line, context.width) + "\033[0m\033[K" for line in lines[:height]]
    return RenderedFrame(
        lines=clipped,
        candidate_rows={row: idx for row, idx in candidate_rows.items() if row <= height},
    )
