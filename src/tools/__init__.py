"""Tool pipelines, request handling, and output rendering."""

from .auth import is_authorized
from .coverage_matrix import run_capability_matrix
from .discovery import CAPABILITY_MATRIX_TOOL, SURFACE_MAP_TOOL, build_discovery_manifest
from .models import CapabilityMatrixRequest, SurfaceMapRequest, ToolResponse
from .params import read_params
from .renderers import format_tool_response_markdown
from .surface_map import run_surface_map

__all__ = [
    "CAPABILITY_MATRIX_TOOL",
    "SURFACE_MAP_TOOL",
    "CapabilityMatrixRequest",
    "SurfaceMapRequest",
    "ToolResponse",
    "build_discovery_manifest",
    "format_tool_response_markdown",
    "is_authorized",
    "read_params",
    "run_capability_matrix",
    "run_surface_map",
]
