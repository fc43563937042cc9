__all__ = ["MondayClient", "MondayAPIError", "build_board_tree", "infer_board_dates", "build_gantt"]

from .client import MondayClient, MondayAPIError
from .boards import build_board_tree
from .dates import infer_board_dates
from .gantt import build_gantt
