"""
Catalog integrity audit.

Catches content mistakes that would otherwise only surface mid-run as an
EmptyInputError (no rank-3 members, a leader pointing at a missing tactic
pool, an auto_success token with no stat).

Exit code convention used by the CLI:
    0 - All checks passed
    1 - Warnings only
    2 - Errors found
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from ..state.schema import GearType, RunConfig, StatType, TacticType


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Issue:
    """A single audit finding."""

    category: str
    severity: Severity
    message: str
    context: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "severity": self.severity.value,
            "message": self.message,
            "context": self.context,
        }


@dataclass
class AuditResult:
    """Complete audit results."""

    issues: list[Issue] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return len([i for i in self.issues if i.severity == Severity.ERROR])

    @property
    def warning_count(self) -> int:
        return len([i for i in self.issues if i.severity == Severity.WARNING])

    @property
    def info_count(self) -> int:
        return len([i for i in self.issues if i.severity == Severity.INFO])

    @property
    def is_healthy(self) -> bool:
        return self.error_count == 0

    @property
    def exit_code(self) -> int:
        if self.error_count:
            return 2
        if self.warning_count:
            return 1
        return 0

    def to_dict(self) -> dict:
        return {
            "status": "pass" if self.is_healthy else "fail",
            "stats": self.stats,
            "summary": {
                "errors": self.error_count,
                "warnings": self.warning_count,
                "info": self.info_count,
            },
            "issues": [i.to_dict() for i in self.issues],
        }


# ─── Checks ──────────────────────────────────────────────────

STAT_TACTICS = {TacticType.PERMANENT_BOOST, TacticType.NEXT_SEGMENT_BOOST}


def _check_member_ranks(catalog: RunConfig) -> list[Issue]:
    issues = []
    for rank in (1, 2, 3):
        if not catalog.templates_of_rank(rank):
            issues.append(Issue(
                category="members",
                severity=Severity.ERROR,
                message=f"No member templates of rank {rank}; drafts at that tier cannot offer a member",
                context={"rank": rank},
            ))
    for template in catalog.member_templates:
        if template.base_value <= 0:
            issues.append(Issue(
                category="members",
                severity=Severity.WARNING,
                message=f"Member '{template.id}' has non-positive base value {template.base_value}",
                context={"id": template.id},
            ))
    return issues


def _check_pools(catalog: RunConfig) -> list[Issue]:
    issues = []
    if not catalog.gear_templates:
        issues.append(Issue("gear", Severity.ERROR, "Gear catalog is empty"))
    if not catalog.tactic_templates:
        issues.append(Issue("tactics", Severity.ERROR, "Generic tactic catalog is empty"))

    for leader in catalog.leaders:
        pool_id = leader.tactics_pool_id
        if pool_id and pool_id not in catalog.tactic_pools:
            issues.append(Issue(
                category="leaders",
                severity=Severity.ERROR,
                message=f"Leader '{leader.id}' references missing tactic pool '{pool_id}'",
                context={"id": leader.id, "valid": sorted(catalog.tactic_pools)},
            ))

    referenced = {l.tactics_pool_id for l in catalog.leaders if l.tactics_pool_id}
    for pool_id in catalog.tactic_pools:
        if pool_id not in referenced:
            issues.append(Issue(
                category="tactics",
                severity=Severity.INFO,
                message=f"Tactic pool '{pool_id}' is not used by any leader",
                context={"pool": pool_id},
            ))
    return issues


def _check_item_stats(catalog: RunConfig) -> list[Issue]:
    issues = []
    for gear in catalog.gear_templates:
        if gear.type == GearType.AUTO_SUCCESS and gear.stat_type is None:
            issues.append(Issue(
                category="gear",
                severity=Severity.ERROR,
                message=f"auto_success gear '{gear.id}' has no stat_type",
                context={"id": gear.id},
            ))
        if gear.type == GearType.HEAL and gear.value <= 0:
            issues.append(Issue(
                category="gear",
                severity=Severity.WARNING,
                message=f"Heal gear '{gear.id}' restores {gear.value} HP",
                context={"id": gear.id},
            ))

    all_tactics = list(catalog.tactic_templates)
    for pool in catalog.tactic_pools.values():
        all_tactics.extend(pool)
    for tactic in all_tactics:
        if tactic.type in STAT_TACTICS and tactic.stat_type is None:
            issues.append(Issue(
                category="tactics",
                severity=Severity.ERROR,
                message=f"{tactic.type.value} tactic '{tactic.id}' has no stat_type",
                context={"id": tactic.id},
            ))
    return issues


def _check_references(catalog: RunConfig) -> list[Issue]:
    issues = []
    for template_id in catalog.starting_member_ids:
        if catalog.get_member_template(template_id) is None:
            issues.append(Issue(
                category="members",
                severity=Severity.ERROR,
                message=f"Starting member '{template_id}' is not a member template",
                context={"id": template_id},
            ))

    groups = {
        "leaders": [l.id for l in catalog.leaders],
        "members": [m.id for m in catalog.member_templates],
        "gear": [g.id for g in catalog.gear_templates],
        "tactics": [t.id for t in catalog.tactic_templates],
    }
    for category, ids in groups.items():
        for item_id, count in Counter(ids).items():
            if count > 1:
                issues.append(Issue(
                    category=category,
                    severity=Severity.ERROR,
                    message=f"Duplicate id '{item_id}' ({count} entries)",
                    context={"id": item_id},
                ))
    return issues


def _check_flavors(catalog: RunConfig) -> list[Issue]:
    issues = []
    for stat in StatType:
        if not catalog.event_flavors.get(stat):
            issues.append(Issue(
                category="events",
                severity=Severity.ERROR,
                message=f"No event flavors for {stat.value}; segment generation will fail",
                context={"stat": stat.value},
            ))
    return issues


def audit_catalog(catalog: RunConfig) -> AuditResult:
    """Run every catalog check."""
    result = AuditResult(stats={
        "leaders": len(catalog.leaders),
        "member_templates": len(catalog.member_templates),
        "gear_templates": len(catalog.gear_templates),
        "tactic_templates": len(catalog.tactic_templates),
        "tactic_pools": len(catalog.tactic_pools),
    })
    result.issues.extend(_check_member_ranks(catalog))
    result.issues.extend(_check_pools(catalog))
    result.issues.extend(_check_item_stats(catalog))
    result.issues.extend(_check_references(catalog))
    result.issues.extend(_check_flavors(catalog))
    return result


# ─── Output ──────────────────────────────────────────────────

def format_console(result: AuditResult) -> str:
    """Format results for console output."""
    lines = [
        "Catalog Integrity Report",
        "=" * 50,
        "Content loaded:",
    ]

    for key, value in result.stats.items():
        lines.append(f"  - {key}: {value}")

    lines.extend(["", "Audit Results", "=" * 50, ""])

    if not result.issues:
        lines.append("All checks passed!")
    else:
        for severity in [Severity.ERROR, Severity.WARNING, Severity.INFO]:
            for issue in [i for i in result.issues if i.severity == severity]:
                lines.append(f"[{severity.value.upper()}] {issue.category}: {issue.message}")
                if issue.context.get("valid"):
                    lines.append(f"  Valid: {', '.join(issue.context['valid'][:5])}")
                lines.append("")

    lines.extend([
        "-" * 50,
        f"Summary: {result.error_count} error(s), {result.warning_count} warning(s), {result.info_count} info",
        f"Status: {'HEALTHY' if result.is_healthy else 'BROKEN'}",
    ])

    return "\n".join(lines)
