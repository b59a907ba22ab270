from .ancestors import nearest_heading_level
from .element import Element, create_div

__all__ = ["Element", "create_div", "nearest_heading_level"]
