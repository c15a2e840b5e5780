"""Status line templates for the fetch command."""

from typing import Any

from langchain_core.prompts import PromptTemplate

from pomidoro.model.state import PomodoroState

# Variables available to user-supplied status templates
STATUS_VARIABLES = ("id", "clock_state", "session", "duration", "percent", "time")

DEFAULT_STATUS_TEMPLATE = "{{session}} {{time}} ({{clock_state}})"


def compile_status_template(template: str) -> PromptTemplate:
    """Build a mustache PromptTemplate from user text.

    Args:
        template: Mustache source, e.g. "{{session}}: {{time}}".

    Returns:
        A PromptTemplate ready for `render_status`.

    Raises:
        ValueError: If the template is malformed or uses an unknown variable.
    """
    try:
        prompt = PromptTemplate.from_template(template, template_format="mustache")
    except Exception as e:
        raise ValueError(f"Invalid template: {e}") from e

    unknown = sorted(set(prompt.input_variables) - set(STATUS_VARIABLES))
    if unknown:
        raise ValueError(
            f"Unknown template variable(s): {', '.join(unknown)}. "
            f"Available: {', '.join(STATUS_VARIABLES)}"
        )
    return prompt


def build_status_source(
    server_id: int,
    state: PomodoroState,
    paused_text: str,
    running_text: str,
) -> dict[str, Any]:
    """Map a fetched state onto the template variables.

    Args:
        server_id: Id of the server the state came from.
        state: The fetched state.
        paused_text: clock_state text while paused.
        running_text: clock_state text while running.

    Returns:
        Dictionary keyed by STATUS_VARIABLES.
    """
    return {
        "id": server_id,
        "clock_state": paused_text if state.is_paused else running_text,
        "session": state.session_name,
        "duration": state.session_duration,
        "percent": state.percent,
        "time": state.time,
    }


def render_status(template: PromptTemplate, source: dict[str, Any]) -> str:
    """Render a compiled status template."""
    return template.format(**source)
