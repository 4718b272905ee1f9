from __future__ import annotations

from datetime import datetime, timezone

from ...settings import SQLITE_DATABASE_FOLDER, WritableFolder
from ..model import CheckContext, CheckDef, Notice, warning

WRITABLE_HINT = "Make sure the folder exists, and is writable to the webserver."


def probe_filename(now: datetime | None = None) -> str:
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%d-%H-%M-%S")
    return f"configtester_{stamp}.txt"


def is_writable(ctx: CheckContext, area: str, folder: str) -> bool:
    """Probe failures of any kind mean "not writable"; they never propagate."""
    path = f"{folder.strip('/')}/{probe_filename()}"
    try:
        return bool(ctx.probes.fs.write_read_delete(area, path))
    except Exception:
        return False


def folders_to_probe(ctx: CheckContext) -> tuple[WritableFolder, ...]:
    folders = list(ctx.settings.writable_folders)
    if ctx.config.get("general/database/driver") == "pdo_sqlite" and SQLITE_DATABASE_FOLDER not in folders:
        folders.append(SQLITE_DATABASE_FOLDER)
    return tuple(folders)


def writable_folders(ctx: CheckContext) -> list[Notice]:
    notices: list[Notice] = []
    for folder in folders_to_probe(ctx):
        if is_writable(ctx, folder.area, folder.folder):
            continue
        notices.append(
            warning(
                f"The application needs to be able to <strong>write files to</strong> the folder {folder.label}, but it doesn't seem to be writable.",
                WRITABLE_HINT,
            )
        )
    return notices


def thumbs_folder(ctx: CheckContext) -> list[Notice]:
    if not ctx.config.get("general/thumbnails/save_files"):
        return []
    if is_writable(ctx, "web", "thumbs"):
        return []
    return [
        warning(
            "Thumbnails are configured to be saved to disk for performance, but the <tt>thumbs/</tt> folder doesn't seem to be writable.",
            WRITABLE_HINT,
        )
    ]


CHECKS: tuple[CheckDef, ...] = (
    CheckDef("fs/writable-folders", writable_folders, ("entry",), "common folders are writable"),
    CheckDef("fs/thumbs-folder", thumbs_folder, ("dashboard",), "thumbs folder is writable when thumbnails are saved"),
)

__all__ = ["CHECKS", "folders_to_probe", "is_writable", "probe_filename", "thumbs_folder", "writable_folders"]
