"""Definition preview construction."""

import unicodedata

DEFAULT_PREVIEW_LENGTH = 100
ELLIPSIS = "..."


def truncate_preview(text: str, max_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """
    Truncate definition text for display in a result list.
    
    The cut is made on a character boundary and never separates a base
    character from its combining marks. When the cut falls inside a word
    the text is shortened to the preceding space, if any. ``ELLIPSIS`` is appended
    whenever anything was removed.
    
    Args:
        text: Full definition text (may be empty)
        max_length: Maximum number of characters kept before the ellipsis
        
    Returns:
        The preview string
    """
    if not text or len(text) <= max_length:
        return text or ""
    
    cut = max(max_length, 0)
    while cut > 0 and unicodedata.combining(text[cut]):
        cut -= 1
    
    truncated = text[:cut]
    # cut inside a word: back up to the previous space
    if not text[cut].isspace():
        last_space = truncated.rfind(" ")
        if last_space > 0:
            truncated = truncated[:last_space]
    
    return truncated.rstrip() + ELLIPSIS
