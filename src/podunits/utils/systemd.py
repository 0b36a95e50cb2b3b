"""Systemd unit naming and unit file rendering."""

import logging

from podunits.models.unit import ServiceUnit
from podunits.utils.templates import render_template


logger = logging.getLogger(__name__)

DEFAULT_PATH = "/usr/local/sbin:/usr/local/bin:/usr/sbin:/usr/bin:/sbin:/bin"

UNIT_TEMPLATE = """\
# Generated by podunits; local edits are overwritten.
[Unit]
Description={{ unit.description }}
{% if unit.wants %}
Wants={{ unit.wants | join(" ") }}
{% endif %}
{% if unit.requires %}
Requires={{ unit.requires | join(" ") }}
{% endif %}
{% if unit.after %}
After={{ unit.after | join(" ") }}
{% endif %}

[Service]
Type={{ unit.type.value }}
{% for key, value in unit.environment.items() %}
Environment={{ (key ~ "=" ~ value) | env_quote }}
{% endfor %}
{% if unit.path %}
Environment={{ ("PATH=" ~ (unit.path + [default_path]) | join(":")) | env_quote }}
{% endif %}
{% for command in unit.start_pre %}
ExecStartPre={{ command | exec_escape }}
{% endfor %}
ExecStart={{ unit.start | exec_escape }}
{% if unit.stop %}
ExecStop={{ unit.stop | exec_escape }}
{% endif %}
{% if unit.stop_post %}
ExecStopPost={{ unit.stop_post | exec_escape }}
{% endif %}
{% if unit.pid_file %}
PIDFile={{ unit.pid_file }}
{% endif %}
Restart={{ unit.restart.value }}
{% if unit.timeout_stop_sec is not none %}
TimeoutStopSec={{ unit.timeout_stop_sec }}
{% endif %}
{% if unit.wanted_by %}

[Install]
WantedBy={{ unit.wanted_by | join(" ") }}
{% endif %}
"""


def unit_name(prefix: str, name: str) -> str:
    """Build a service unit name such as ``pod-web.service``."""
    return f"{prefix}-{name}.service"


def exec_escape(command: str) -> str:
    """Escape a shell-quoted command line for an Exec*= setting.

    systemd expands ``%`` specifiers and ``$`` variables in command lines;
    doubling them passes the characters through to the command untouched.
    Arguments are C-unescaped even inside quotes, so backslashes are doubled
    and line breaks written as escapes to keep the command on one line.
    """
    command = command.replace("\\", "\\\\")
    command = command.replace("\n", "\\n").replace("\r", "\\r")
    return command.replace("%", "%%").replace("$", "$$")


def env_quote(assignment: str) -> str:
    """Quote a ``KEY=value`` pair for an Environment= setting."""
    escaped = assignment.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", "\\n").replace("\r", "\\r")
    return f'"{escaped}"'


def render_unit(unit: ServiceUnit) -> str:
    """Render a service unit descriptor in systemd's unit file format."""
    logger.debug(f"Rendering unit {unit.name}")
    return render_template(
        UNIT_TEMPLATE,
        filters={"exec_escape": exec_escape, "env_quote": env_quote},
        unit=unit,
        default_path=DEFAULT_PATH,
    )
