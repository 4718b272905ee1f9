from __future__ import annotations

from ..model import CheckContext, CheckDef, Notice, warning

IMAGE_CAPABILITIES: tuple[tuple[str, str, str], ...] = (
    (
        "exif",
        "The <tt>exif</tt> capability is not available, which means that thumbnail images can not be created.",
        "Make sure the <tt>exif</tt> support is installed and enabled in your runtime.",
    ),
    (
        "fileinfo",
        "The <tt>fileinfo</tt> capability is not available, which means that thumbnail images can not be created.",
        "Make sure the <tt>fileinfo</tt> support is installed and enabled in your runtime.",
    ),
    (
        "gd",
        "The <tt>gd</tt> image library is not available, which means that thumbnail images can not be created.",
        "Make sure the <tt>gd</tt> support is installed and enabled in your runtime.",
    ),
)


def _has(ctx: CheckContext, capability: str) -> bool:
    return bool(ctx.probes.extensions.has(capability))


def gd(ctx: CheckContext) -> list[Notice]:
    if _has(ctx, "gd"):
        return []
    return [
        warning(
            "The current runtime doesn't have the <strong>GD library enabled</strong>. Without this, thumbnails can not be generated. "
            "Please enable <tt>gd</tt>, or ask your system-administrator to do so."
        )
    ]


def image_functions(ctx: CheckContext) -> list[Notice]:
    return [warning(message, detail) for capability, message, detail in IMAGE_CAPABILITIES if not _has(ctx, capability)]


CHECKS: tuple[CheckDef, ...] = (
    CheckDef("ext/gd", gd, ("dashboard",), "GD image library available"),
    CheckDef("ext/image-functions", image_functions, ("dashboard",), "exif, fileinfo and gd available"),
)

__all__ = ["CHECKS", "IMAGE_CAPABILITIES", "gd", "image_functions"]
