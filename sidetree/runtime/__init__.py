"""Runtime package: options, cache, status line, executor and the UI loop."""

from .cache import CACHE_PATH, Cache, load_cache, save_cache
from .config import APP_NAME, CONFIG_PATH, Config, default_script_path
from .events import EventPump, Tick
from .executor import App
from .loop import dispatch_event, run_main_loop
from .prompt import StatusLine
from .style import Style, format_style, parse_style

__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "CACHE_PATH",
    "App",
    "Cache",
    "Config",
    "EventPump",
    "StatusLine",
    "Style",
    "Tick",
    "default_script_path",
    "dispatch_event",
    "format_style",
    "load_cache",
    "parse_style",
    "run_main_loop",
    "save_cache",
]
