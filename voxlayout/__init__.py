from .config import EnvConfig, LayoutConfig, LayoutType
from .env.env import LayoutEnv, Level

__all__ = ["EnvConfig", "LayoutConfig", "LayoutEnv", "LayoutType", "Level"]
