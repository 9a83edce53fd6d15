from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from placement_engine.core.logging_config import configure_logging  # noqa: E402
from placement_engine.engine import aggregate, simulate  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run a what-if simulation or a rejection pattern analysis from a JSON fixture."
    )
    parser.add_argument("fixture", help="JSON file with 'profile', 'opportunities', 'changes' and/or 'applications'")
    parser.add_argument(
        "--mode",
        choices=("simulate", "patterns"),
        default="simulate",
        help="Which engine operation to run.",
    )
    parser.add_argument(
        "--reference",
        action="append",
        default=None,
        help="Reference company for match score deltas (repeatable). Omit for the configured list.",
    )
    parser.add_argument("--unit", default=None, help="Effort unit used in the timeline, e.g. Week.")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL.")
    args = parser.parse_args()

    configure_logging(args.log_level)
    payload = json.loads(Path(args.fixture).read_text(encoding="utf-8"))

    if args.mode == "patterns":
        result = aggregate(payload.get("profile"), payload.get("applications") or [])
    else:
        result = simulate(
            payload.get("profile"),
            payload.get("changes") or [],
            payload.get("opportunities") or [],
            reference_companies=args.reference,
            effort_unit=args.unit,
        )
    print(result.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
