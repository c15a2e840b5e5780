"""Text templates for pomidoro output."""

from pomidoro.prompts.status import (
    DEFAULT_STATUS_TEMPLATE,
    STATUS_VARIABLES,
    build_status_source,
    compile_status_template,
    render_status,
)

__all__ = [
    "DEFAULT_STATUS_TEMPLATE",
    "STATUS_VARIABLES",
    "build_status_source",
    "compile_status_template",
    "render_status",
]
