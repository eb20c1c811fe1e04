"""Load viewer configuration YAML for the flow documentation page.

This subpackage parses ``config/flowdocs.yaml`` into a :class:`ViewerConfig`:
which catalog to load, where the static page is written, the page heading
and timing notes, highlighting options, and the host/port used by
``flowdocs serve``. Absent keys take the dataclass defaults.

Examples
--------
>>> from pathlib import Path
>>> from flowdocs.config import load_viewer_config
>>> config = load_viewer_config(Path("config/flowdocs.yaml"))  # doctest: +SKIP
>>> config.output  # doctest: +SKIP
PosixPath('public/payment-flow.html')
"""

from .loader import build_viewer_config, load_viewer_config
from .models import DEFAULT_SUBTITLE, DEFAULT_TITLE, ViewerConfig, ViewerConfigError

__all__ = [
    "DEFAULT_SUBTITLE",
    "DEFAULT_TITLE",
    "ViewerConfig",
    "ViewerConfigError",
    "build_viewer_config",
    "load_viewer_config",
]
