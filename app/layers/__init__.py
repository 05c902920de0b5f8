"""Processing layers for project estimation pipeline."""

# Note: Import layers individually to avoid circular imports
# Use: from app.layers.layer1_normalization import normalize_input
# Use: from app.layers.layer2_generation import generate_task_breakdown
# Use: from app.layers.layer3_rules import derive_estimation_signals
# Use: from app.layers.layer4_proposal import render_proposal
# Use: from app.layers.layer5_export import create_pdf_buffer

__all__ = [
    "layer1_normalization",
    "layer2_generation",
    "layer3_rules",
    "layer4_proposal",
    "layer5_export",
]
