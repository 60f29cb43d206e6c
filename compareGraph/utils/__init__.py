from .logger import setup_logger
from .config_manager import config_manager, ConfigManager
from .io_utils import save_json, load_json

__all__ = [
    'setup_logger',
    'config_manager',
    'ConfigManager',
    'save_json',
    'load_json',
]
