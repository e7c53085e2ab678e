"""Plan formatters: a human workflow document and an agent instruction block."""

from mapper.reports.agent_block import render_agent_block, render_issue_block
from mapper.reports.workflow import render_workflow_doc

__all__ = [
    "render_agent_block",
    "render_issue_block",
    "render_workflow_doc",
]
