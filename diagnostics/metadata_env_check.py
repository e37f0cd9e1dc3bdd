"""Collect diagnostics about the pod metadata environment."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from k8s_metadata.base_metadata import BASE_METADATA_VARIABLES, missing_base_metadata
from k8s_metadata.config import K8S_METADATA_ALLOW_KUBECONFIG, K8S_METADATA_TIMEOUT_SECONDS

log = logging.getLogger(__name__)

_DIAGNOSTIC_DIR = Path("diagnostics")


def _variable_state(value: Optional[str]) -> str:
    if value is None:
        return "missing"
    if not value.strip():
        return "blank"
    return "ok"


def _collect_variables(environ: Mapping[str, str]) -> Dict[str, Dict[str, Any]]:
    variables: Dict[str, Dict[str, Any]] = {}
    for key, name in BASE_METADATA_VARIABLES.items():
        value = environ.get(name)
        state = _variable_state(value)
        variables[name] = {
            "key": key.value,
            "state": state,
            "value": value if state == "ok" else None,
        }
    return variables


def _collect_project_flags() -> Dict[str, Any]:
    return {
        "K8S_METADATA_ALLOW_KUBECONFIG": K8S_METADATA_ALLOW_KUBECONFIG,
        "K8S_METADATA_TIMEOUT_SECONDS": K8S_METADATA_TIMEOUT_SECONDS,
    }


def gather_diagnostics(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    env = os.environ if environ is None else environ
    invalid: List[str] = missing_base_metadata(env)
    for name in invalid:
        log.warning("Base metadata variable %s is missing or blank", name)
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "variables": _collect_variables(env),
        "invalid": invalid,
        "project_flags": _collect_project_flags(),
    }


def write_reports(data: Mapping[str, Any], directory: Path = _DIAGNOSTIC_DIR) -> tuple[Path, Path]:
    directory.mkdir(parents=True, exist_ok=True)
    json_path = directory / "metadata_env.json"
    txt_path = directory / "metadata_env.txt"

    with json_path.open("w", encoding="utf-8") as fp:
        json.dump(data, fp, ensure_ascii=False, indent=2, sort_keys=True)

    lines = [
        f"Timestamp: {data.get('timestamp', 'unknown')}",
        "",
        "Base metadata:",
    ]

    variables = data.get("variables", {})
    if isinstance(variables, Mapping):
        for name, details in variables.items():
            if not isinstance(details, Mapping):
                continue
            state = details.get("state", "unknown")
            if state == "ok":
                lines.append(f"  - {name}: {details.get('value')}")
            else:
                lines.append(f"  - {name}: <{state}>")

    lines.append("")
    lines.append("Project flags:")
    flags = data.get("project_flags", {})
    if isinstance(flags, Mapping):
        for name, value in sorted(flags.items()):
            lines.append(f"  - {name}={value}")

    invalid = data.get("invalid") or []
    lines.append("")
    if invalid:
        lines.append(f"Result: {len(invalid)} invalid variable(s): {', '.join(invalid)}")
    else:
        lines.append("Result: all base metadata present")

    with txt_path.open("w", encoding="utf-8") as fp:
        fp.write("\n".join(lines) + "\n")

    return json_path, txt_path


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        type=Path,
        default=_DIAGNOSTIC_DIR,
        help="Directory for the JSON and text reports (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    data = gather_diagnostics()
    json_path, _ = write_reports(data, directory=args.output_dir)
    log.info("Wrote metadata diagnostics to %s", json_path)
    return 1 if data["invalid"] else 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    sys.exit(main())
