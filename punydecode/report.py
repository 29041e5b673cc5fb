"""Batch decoding and result dumping"""

import json
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml
from tqdm import tqdm

from punydecode.punycode import PunycodeError, decode
from punydecode.unicode import code_points_to_text

# --- config ---
FORMATS = ("json", "yaml")
YAML_SUFFIXES = (".yaml", ".yml")


def describe_failure(kind: str, position: int | None, message: str) -> str:
    """Format a decoding failure for display"""
    where = f" at position {position}" if position is not None else ""
    return f"{kind}{where}: {message}"


@dataclass
class DecodeResult:
    """Outcome of decoding a single label"""

    label: str
    text: str | None = None
    code_points: list[int] = field(default_factory=list)
    error: str | None = None
    message: str | None = None
    position: int | None = None

    @property
    def ok(self) -> bool:
        """Whether the label decoded successfully"""
        return self.error is None

    @property
    def failure(self) -> str | None:
        """Error kind, position and message, or None on success"""
        if self.ok:
            return None
        return describe_failure(self.error or "error", self.position, self.message or "")


def decode_label(label: str) -> DecodeResult:
    """Decode one label, capturing a failure in the result instead of raising"""
    try:
        code_points = decode(label)
    except PunycodeError as e:
        return DecodeResult(label, error=e.kind, message=str(e), position=e.position)

    try:
        text = code_points_to_text(code_points)
    except ValueError as e:
        return DecodeResult(label, code_points=code_points, error="bad_input", message=str(e))

    return DecodeResult(label, text=text, code_points=code_points)


def decode_labels(labels: Iterable[str], progress: bool = False) -> list[DecodeResult]:
    """Decode many labels, returns one result per label in order"""
    labels = list(labels)
    results: list[DecodeResult] = []

    with tqdm(total=len(labels), unit="label", disable=not progress) as pbar:
        for label in labels:
            result = decode_label(label)
            if not result.ok:
                pbar.write(f"Failed to decode {label!r}: {result.failure}")
            results.append(result)
            pbar.update(1)

    return results


def read_labels(path: Path) -> list[str]:
    """Read one label per line, skipping blank lines"""
    with open(path, encoding="utf8") as f:
        return [line.strip() for line in f if line.strip()]


def guess_format(path: Path) -> str:
    """Pick an output format from the file suffix"""
    return "yaml" if path.suffix.lower() in YAML_SUFFIXES else "json"


def dump_results(results: list[DecodeResult], path: Path, fmt: str | None = None) -> None:
    """Write results to a JSON or YAML file"""
    fmt = fmt or guess_format(path)
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format '{fmt}'. Valid formats: {', '.join(FORMATS)}")

    data: list[dict[str, Any]] = [asdict(r) for r in results]

    with open(path, "w", encoding="utf8") as f:
        if fmt == "yaml":
            yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)
        else:
            json.dump(data, f, indent=2, ensure_ascii=False)
