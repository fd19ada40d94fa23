from .logger import setup_logger
from .config_manager import config_manager
from .io_utils import load_json, save_json

__all__ = [
    'setup_logger',
    'config_manager',
    'load_json',
    'save_json',
]
