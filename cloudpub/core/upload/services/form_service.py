"""
Form data encoding.

Maps a source's descriptive fields to the flat string-keyed form fields the
upload endpoint accepts. The separators are part of the remote protocol:
tags are comma-joined and context entries are ``key=value`` pairs joined by
``|``.
"""
from typing import Any, Dict, Iterable, Mapping, Optional

TAG_SEPARATOR = ','
CONTEXT_SEPARATOR = '|'


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def encode_tags(tags: Optional[Iterable[str]]) -> Optional[str]:
    """
    Join tags with commas, preserving order.

    Returns None when there are no tags.
    """
    if not tags:
        return None
    return TAG_SEPARATOR.join(tags)


def encode_context(context: Optional[Mapping[str, Any]]) -> Optional[str]:
    """
    Encode contextual metadata as ``key=value`` pairs joined by ``|``.

    Pairs follow the mapping's iteration order.

    Example:
        >>> encode_context({'alt': 'cat', 'caption': 'hi'})
        'alt=cat|caption=hi'
    """
    if not context:
        return None
    return CONTEXT_SEPARATOR.join(
        f"{key}={_render_value(value)}" for key, value in context.items()
    )


def build_form_data(source: Any, upload_preset: str) -> Dict[str, str]:
    """
    Build the form fields for an upload request.

    Args:
        source: Upload source (anything with ``public_id``, ``folder``,
            ``tags`` and ``context`` attributes)
        upload_preset: Upload preset to send with the request

    Returns:
        Form fields; optional keys appear only when their field is set
    """
    data = {'upload_preset': upload_preset}

    if source.public_id:
        data['public_id'] = source.public_id
    if source.folder:
        data['folder'] = source.folder

    tags = encode_tags(source.tags)
    if tags:
        data['tags'] = tags

    context = encode_context(source.context)
    if context:
        data['context'] = context

    return data
