"""Automated checks to highlight balancing issues."""

from __future__ import annotations

from dataclasses import dataclass

from ..app import GameApp
from ..domain.creatures import FUSION_TIERS
from ..domain.economy import resell_value
from ..domain.progression import RANKS


@dataclass(slots=True)
class ChecklistIssue:
    severity: str
    message: str


def run_checklist(app: GameApp) -> list[ChecklistIssue]:
    issues: list[ChecklistIssue] = []
    config = app.config

    if config.gacha.starting_credits < config.gacha.pull_cost:
        issues.append(
            ChecklistIssue("error", "Starting credits do not cover a single pull.")
        )

    if config.gacha.pull_cost <= resell_value(FUSION_TIERS[0].input_rarity):
        issues.append(
            ChecklistIssue(
                "warning",
                "Releasing a common creature refunds at least the cost of a pull.",
            )
        )

    if not 0.0 <= config.provider.shiny_chance <= 1.0:
        issues.append(ChecklistIssue("error", "Shiny chance must be between 0 and 1."))

    if config.fusion.max_attempts < 1:
        issues.append(ChecklistIssue("error", "Fusion needs at least one draw attempt."))

    for tier in FUSION_TIERS:
        consumed = 3 * resell_value(tier.input_rarity)
        if resell_value(tier.output_rarity) < consumed:
            issues.append(
                ChecklistIssue(
                    "warning",
                    f"Fusing {tier.input_rarity.value} creatures loses resell value "
                    f"({consumed} in, {resell_value(tier.output_rarity)} out).",
                )
            )

    for lower, upper in zip(RANKS, RANKS[1:]):
        if lower.next_score != upper.min_score:
            issues.append(
                ChecklistIssue("error", f"Rank '{lower.name}' does not hand over to '{upper.name}'.")
            )

    return issues
