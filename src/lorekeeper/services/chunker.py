"""Word-boundary text chunking."""

DEFAULT_CHUNK_SIZE = 1000


def chunk_text(text: str, max_chunk_size: int = DEFAULT_CHUNK_SIZE) -> list[str]:
    """Split text into chunks of whole words, each at most ``max_chunk_size`` characters.

    Words are packed greedily: a word joins the current chunk (separated by one
    space) unless that would push the chunk past ``max_chunk_size``, in which
    case the chunk is closed and the word starts the next one. A single word
    longer than ``max_chunk_size`` is never split and forms its own chunk.

    Args:
        text: Input text; any run of whitespace separates words
        max_chunk_size: Maximum chunk length in characters

    Returns:
        Chunks in text order; empty if the text has no words
    """
    if max_chunk_size < 1:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")

    chunks: list[str] = []
    current = ""
    for word in text.split():
        if not current:
            current = word
        elif len(current) + 1 + len(word) > max_chunk_size:
            chunks.append(current)
            current = word
        else:
            current = f"{current} {word}"

    if current:
        chunks.append(current)
    return chunks
