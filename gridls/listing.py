"""Render directory entries as a column grid or a long-format table.

Both modes skip dot-entries unless ``show_hidden`` is set and return the
complete listing as one string ending in a newline. Long format reads each
entry's metadata and aborts with ``EntryMetadataError`` on the first failure.
"""

from __future__ import annotations

import logging
import stat
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from .ansi import Color, FgColor, colorize, display_width, pad_to_width
from .entries import EntryInfo, EntryMetadataError, ListingEntry

logger = logging.getLogger(__name__)

MAX_COLUMNS = 12
COLUMN_GUTTER = 2
BLOCK_UNIT_MULTIPLIER = 4
SIZE_MIN_WIDTH = 4
MTIME_MIN_WIDTH = 13
UNKNOWN_OWNER = "?"
DIRECTORY_COLOR = Color(foreground=FgColor.BLUE)

_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class DisplayOptions:
    show_color: bool = True
    show_hidden: bool = False
    long_format: bool = False


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def visible_entries(entries: Sequence[ListingEntry], options: DisplayOptions) -> list[ListingEntry]:
    """Return entries that should be shown, keeping their original order."""
    if options.show_hidden:
        return list(entries)
    return [entry for entry in entries if not is_hidden(entry.name)]


def _styled_name(name: str, is_dir: bool, options: DisplayOptions) -> str:
    if options.show_color and is_dir:
        return colorize(name, DIRECTORY_COLOR)
    return name


def grid_column_count(longest_name: int, terminal_width: int) -> int:
    """Number of grid columns for names up to ``longest_name`` wide.

    Capped at ``MAX_COLUMNS`` and never less than one.
    """
    cell_width = max(0, longest_name) + COLUMN_GUTTER
    return max(1, min(MAX_COLUMNS, terminal_width // cell_width))


def render_grid(entries: Sequence[ListingEntry], options: DisplayOptions, terminal_width: int) -> str:
    """Lay out entry names left-to-right in fixed-width cells.

    A row ends after the entry whose position in ``entries`` (hidden ones
    included) is a multiple of the column count, so hidden entries shift
    where rows break.
    """
    shown = visible_entries(entries, options)
    longest = max((display_width(entry.name) for entry in shown), default=0)
    columns = grid_column_count(longest, terminal_width)
    cell_width = longest + COLUMN_GUTTER
    logger.debug("grid layout: %d entries, %d columns of width %d", len(shown), columns, cell_width)

    rows: list[str] = []
    row: list[str] = []
    for idx, entry in enumerate(entries):
        if not options.show_hidden and is_hidden(entry.name):
            continue
        row.append(pad_to_width(_styled_name(entry.name, entry.is_dir, options), cell_width))
        if (idx + 1) % columns == 0:
            rows.append("".join(row))
            row = []
    if row or not rows:
        rows.append("".join(row))
    return "\n".join(rows) + "\n"


def one_year_before(now: datetime) -> datetime:
    """Return the same wall-clock moment one calendar year earlier.

    Feb 29 has no counterpart in the previous year and rolls over to Mar 1.
    """
    try:
        return now.replace(year=now.year - 1)
    except ValueError:
        return now.replace(year=now.year - 1, month=3, day=1)


def _naive_local(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def format_mtime(mtime: datetime, now: datetime) -> str:
    """Format as ``Mon DD HH:MM``, or ``Mon DD  YYYY`` when older than a year.

    Aware datetimes are converted to naive local time before comparing.
    """
    mtime = _naive_local(mtime)
    now = _naive_local(now)
    month = _MONTH_ABBREVIATIONS[mtime.month - 1]
    if mtime < one_year_before(now):
        return f"{month} {mtime.day:02d}  {mtime.year}"
    return f"{month} {mtime.day:02d} {mtime.hour:02d}:{mtime.minute:02d}"


def lookup_user_name(uid: int) -> str | None:
    import pwd

    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return None


def lookup_group_name(gid: int) -> str | None:
    import grp

    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return None


def owner_and_group(info: EntryInfo) -> tuple[str, str]:
    """Resolve display names for the entry's owner and group.

    Unknown uids show numerically. An unknown gid falls back to the owner's
    user name when that resolved, else the numeric gid. Without platform
    metadata both are ``?``.
    """
    meta = info.platform
    if meta is None:
        return UNKNOWN_OWNER, UNKNOWN_OWNER

    user_name = lookup_user_name(meta.uid)
    owner = user_name if user_name is not None else str(meta.uid)

    group = lookup_group_name(meta.gid)
    if group is None:
        group = user_name if user_name is not None else str(meta.gid)
    return owner, group


def block_contribution(info: EntryInfo) -> int:
    """Allocated blocks for the ``total`` line, in 512-byte units."""
    meta = info.platform
    if meta is None or meta.block_size <= 0:
        return 0
    blocks = -(-info.size // meta.block_size)
    return blocks * BLOCK_UNIT_MULTIPLIER


def format_long_row(info: EntryInfo, options: DisplayOptions, now: datetime) -> str:
    owner, group = owner_and_group(info)
    links = info.platform.link_count if info.platform is not None else 1
    return "{mode} {links} {owner} {group} {size:>{size_w}} {mtime:>{mtime_w}}  {name}".format(
        mode=stat.filemode(info.mode),
        links=links,
        owner=owner,
        group=group,
        size=info.size,
        size_w=SIZE_MIN_WIDTH,
        mtime=format_mtime(info.mtime, now),
        mtime_w=MTIME_MIN_WIDTH,
        name=_styled_name(info.name, info.is_dir, options),
    )


def render_long(
    entries: Sequence[ListingEntry],
    options: DisplayOptions,
    now: datetime | None = None,
) -> str:
    """Render a ``total`` header followed by one metadata row per entry."""
    if now is None:
        now = datetime.now()

    block_count = 0
    rows: list[str] = []
    for entry in visible_entries(entries, options):
        try:
            info = entry.info()
        except OSError as exc:
            raise EntryMetadataError(entry.name, exc) from exc
        contribution = block_contribution(info)
        if info.platform is None:
            logger.debug("no platform metadata for %s", entry.name)
        else:
            logger.debug(
                "%s: %d blocks counted, %d allocated",
                entry.name,
                contribution,
                info.platform.allocated_blocks,
            )
        block_count += contribution
        rows.append(format_long_row(info, options, now) + "\n")

    return f"total {block_count}\n" + "".join(rows)


def render_listing(
    entries: Sequence[ListingEntry],
    options: DisplayOptions,
    terminal_width: int,
    now: datetime | None = None,
) -> str:
    if options.long_format:
        return render_long(entries, options, now=now)
    return render_grid(entries, options, terminal_width)
