"""
Media link helpers.

Music items carry a link; when it points at a YouTube video the browser
embeds a player and documents print the video id.
"""

from __future__ import annotations

import re

# youtu.be/<id>, youtube.com/watch?v=<id>, /embed/<id>, /v/<id>, /e/<id>,
# /shorts/<id> and /<anything>/<anything>/<id> (legacy user/channel URLs)
_YOUTUBE_PATTERN = re.compile(
    r"^(?:https?://)?(?:www\.|m\.)?"
    r"(?:youtube\.com/(?:[^/\n\s]+/\S+/|(?:v|e(?:mbed)?|shorts)/|\S*?[?&]v=)"
    r"|youtu\.be/)"
    r"([a-zA-Z0-9_-]{11})"
)

YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{video_id}"


def extract_youtube_video_id(url: str | None) -> str | None:
    """
    Extract the 11-character YouTube video id from a URL.

    Returns:
        The video id, or None if the URL is not a recognized YouTube URL
    """
    if not url:
        return None
    match = _YOUTUBE_PATTERN.match(url.strip())
    return match.group(1) if match else None


def youtube_embed_url(video_id: str) -> str:
    """Player URL for an embedded video."""
    return YOUTUBE_EMBED_URL.format(video_id=video_id)
