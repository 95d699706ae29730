from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from dataclasses import asdict

from app.ops.integrity_checks import IntegrityFinding, check_orphan_stores, resolve_projects, run_integrity_checks
from app.techno.core.config import settings
from app.techno.db.session import build_engine, build_session_factory


def _serialize_findings(findings: list[IntegrityFinding]) -> list[dict]:
    return [asdict(finding) for finding in findings]


def _summarize(findings: list[IntegrityFinding]) -> dict:
    counts = Counter(f.severity for f in findings)
    return {
        "total": len(findings),
        "critical": counts.get("CRITICAL", 0),
        "warn": counts.get("WARN", 0),
    }


def _format_text(summary: dict, findings: list[IntegrityFinding]) -> str:
    lines = [
        "Store Integrity Scan Report",
        f"Total findings: {summary['total']}",
        f"CRITICAL: {summary['critical']}",
        f"WARN: {summary['warn']}",
        "",
    ]
    for finding in findings:
        lines.append(
            f"[{finding.severity}] {finding.check_id} project={finding.project_code} "
            f"entity={finding.entity} id={finding.entity_id or '-'} {finding.message}"
        )
        if finding.details:
            lines.append(f"  details={json.dumps(finding.details, default=str)}")
    return "\n".join(lines)


def run_scan(project: str, output_format: str, fail_on_critical: bool, *, database_url: str | None = None) -> int:
    if not settings.OPS_ENABLE_INTEGRITY_SCAN:
        print("Integrity scan disabled by OPS_ENABLE_INTEGRITY_SCAN.", file=sys.stderr)
        return 2
    engine = build_engine(database_url or settings.DATABASE_URL)
    SessionLocal = build_session_factory(engine)
    try:
        with SessionLocal() as db:
            findings: list[IntegrityFinding] = []
            if project.lower() == "all":
                findings.extend(check_orphan_stores(db))
            for project_code in resolve_projects(db, project):
                findings.extend(run_integrity_checks(db, project_code))
    finally:
        engine.dispose()
    summary = _summarize(findings)
    output = {
        "summary": summary,
        "findings": _serialize_findings(findings),
    }
    if output_format == "json":
        print(json.dumps(output, indent=2, default=str))
    else:
        print(_format_text(summary, findings))
    if fail_on_critical and summary["critical"] > 0:
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Project store integrity scan")
    parser.add_argument("--project", required=True, help="Project code or 'all'")
    parser.add_argument("--format", choices=["json", "text"], default="text")
    parser.add_argument("--fail-on-critical", action="store_true")
    args = parser.parse_args(argv)
    if args.project.lower() != "all" and not args.project.isdigit():
        parser.error(f"--project must be a numeric project code or 'all', got {args.project!r}")
    return run_scan(args.project, args.format, args.fail_on_critical)


if __name__ == "__main__":
    raise SystemExit(main())
