# tests/utils/__init__.py

from .constants import DEFAULT_TEST_LOG_LEVEL, PROJ_ROOT
from .packages import (
    RecordingResolver,
    install_package,
    make_node_package,
    write_config_file,
)


__all__ = [  # noqa: RUF022
    # constants
    "DEFAULT_TEST_LOG_LEVEL",
    "PROJ_ROOT",
    # packages
    "RecordingResolver",
    "install_package",
    "make_node_package",
    "write_config_file",
]
