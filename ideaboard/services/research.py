"""Deterministic research brief for an idea."""

from __future__ import annotations

from ideaboard.domain.ideas import Idea


def build_research_brief(idea: Idea) -> str:
    tags = ", ".join(idea.tags) or "none"
    return "\n".join(
        [
            f"Project: {idea.title}",
            "",
            "Research context:",
            f"- Current status: {idea.status or 'new'}",
            f"- Label: {idea.label or 'none'}",
            f"- Tags: {tags}",
            "",
            "Suggested research angles:",
            "- Competitors / existing tools solving similar problem",
            "- Technical feasibility: data sources, model choices, latency/cost constraints",
            "- Build scope for MVP (1-2 week version)",
            "- Risks: privacy, quality, over-automation, hallucination",
            "",
            "Concrete next steps:",
            "1) Write one-sentence user outcome",
            "2) Define smallest demo workflow",
            "3) List must-have integrations",
            "4) Choose one measurable success metric",
            "",
            f"Idea notes: {idea.description or 'No description yet.'}",
        ]
    )
