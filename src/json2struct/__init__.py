"""json2struct package root."""

from loguru import logger

from json2struct.exceptions import (
    ConfigError,
    InvalidJSON,
    InvalidStructName,
    TransformError,
)
from json2struct.model import DedupPolicy, TransformConfig
from json2struct.transform import Transformer, build_graph, transform

__all__ = [
    "__version__",
    "ConfigError",
    "DedupPolicy",
    "InvalidJSON",
    "InvalidStructName",
    "TransformConfig",
    "TransformError",
    "Transformer",
    "build_graph",
    "transform",
]

__version__ = "0.1.0"

# Silent unless an application opts in with logger.enable("json2struct").
logger.disable("json2struct")
