from .blank_line_around_header import BLANK_LINE_AROUND_HEADER
from .blank_line_around_list import BLANK_LINE_AROUND_LIST
from .one_sentence_per_line import ONE_SENTENCE_PER_LINE
from .backticked_code_reference import BACKTICKED_CODE_REFERENCE
from .annotation_pairing import ANNOTATION_PAIRING
from .code_block_language import CODE_BLOCK_LANGUAGE
from .header_level_increment import HEADER_LEVEL_INCREMENT

__all__ = [
    "BLANK_LINE_AROUND_HEADER",
    "BLANK_LINE_AROUND_LIST",
    "ONE_SENTENCE_PER_LINE",
    "BACKTICKED_CODE_REFERENCE",
    "ANNOTATION_PAIRING",
    "CODE_BLOCK_LANGUAGE",
    "HEADER_LEVEL_INCREMENT",
]
