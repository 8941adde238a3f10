"""console — terminal display helpers and the interactive shell."""

from tms.console.display import render_info, render_machine, render_status, render_tape, tape_content
from tms.console.shell import Shell

__all__ = ["Shell", "render_info", "render_machine", "render_status", "render_tape", "tape_content"]
