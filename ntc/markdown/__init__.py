from .headings import MAX_HEADING_LEVEL, heading_level_of_tag, shift_headings

__all__ = ["MAX_HEADING_LEVEL", "heading_level_of_tag", "shift_headings"]
