"""Layer 4: Proposal - legacy draft and templated markdown proposal."""

from .models import ProposalContext
from .proposal_generator import (
    generate_proposal_draft,
    build_proposal_variables,
    render_proposal,
)
from .template_renderer import (
    render_template,
    markdown_to_plain_text,
    load_proposal_template,
    DEFAULT_TEMPLATE_PATH,
)

__all__ = [
    "ProposalContext",
    "generate_proposal_draft",
    "build_proposal_variables",
    "render_proposal",
    "render_template",
    "markdown_to_plain_text",
    "load_proposal_template",
    "DEFAULT_TEMPLATE_PATH",
]
