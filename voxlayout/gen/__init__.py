from .basic import BasicLayout
from .cave import CaveLayout
from .layout import CATALOG, GridLayout
from .primitives import box_shape, extract_primitives
from .recipe import build_recipe
from .tower import TowerLayout
from .walls import WallsLayout

__all__ = [
    "CATALOG",
    "BasicLayout",
    "CaveLayout",
    "GridLayout",
    "TowerLayout",
    "WallsLayout",
    "box_shape",
    "build_recipe",
    "extract_primitives",
]
