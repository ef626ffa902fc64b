"""schema_harvest.parser: Поиск и декодирование блоков JSON-LD в HTML."""

from .jsonld import JSONLD_MIME, decode_block, extract_blocks

__all__ = ["JSONLD_MIME", "extract_blocks", "decode_block"]
