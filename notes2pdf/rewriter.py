"""Rewrite absolute asset image references so they resolve from the notes root."""
import logging
import posixpath
import re

logger = logging.getLogger(__name__)

# ![alt](/assets/... "optional title") with any number of leading slashes before "assets/"
IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\((/+assets/[^)\s]+)(\s[^)]*)?\)")


def rewrite_asset_paths(text: str, group: str) -> str:
    """Prefix every ``/assets/...`` image path in ``text`` with ``group``.

    Alt text and image titles are kept as is. Relative paths, URLs and
    anything that is not a complete image reference are left untouched.
    """
    count = 0

    def replace(match: re.Match) -> str:
        nonlocal count
        alt, img_path, title = match.group(1), match.group(2), match.group(3) or ""
        relative_path = posixpath.normpath(posixpath.join(group, img_path.lstrip("/")))
        count += 1
        return f"![{alt}]({relative_path}{title})"

    rewritten = IMAGE_PATTERN.sub(replace, text)
    if count:
        logger.debug(f"Rewrote {count} image path(s) for group {group}")
    return rewritten
