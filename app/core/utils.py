def truncate_content(content: str | None, max_length: int = 150) -> str:
    """Shorten ``content`` to ``max_length`` characters, cutting at a word boundary and adding '...'."""
    if not content:
        return ""
    if len(content) <= max_length:
        return content
    truncated = content[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        return truncated[:last_space] + "..."
    return truncated + "..."
