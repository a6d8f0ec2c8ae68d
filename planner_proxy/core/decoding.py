"""Best-effort decoding of model output that is expected to carry JSON.

The model often wraps its JSON in a fenced code block (```json ... ```).
Normalizers clean the raw text before decoding and can be swapped per call.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Sequence

Normalizer = Callable[[str], str]

_FENCE_RE = re.compile(
    r"^```[\w+-]*[ \t]*\n?(?P<body>.*?)\n?[ \t]*```$",
    re.DOTALL,
)


@dataclass(slots=True, frozen=True)
class DecodeResult:
    ok: bool
    value: Any = None
    error: str | None = None


def strip_code_fence(text: str) -> str:
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match is None:
        return stripped

    return match.group("body").strip()


DEFAULT_NORMALIZERS: tuple[Normalizer, ...] = (strip_code_fence,)


def decode_structured_text(
    text: str,
    normalizers: Sequence[Normalizer] = DEFAULT_NORMALIZERS,
) -> DecodeResult:
    """Decode ``text`` as JSON after running it through ``normalizers``.

    Never raises: a failure is reported through ``DecodeResult.ok``.
    """

    try:
        cleaned = text
        for normalize in normalizers:
            cleaned = normalize(cleaned)

        return DecodeResult(ok=True, value=json.loads(cleaned))
    except (ValueError, TypeError, RecursionError) as exc:
        return DecodeResult(ok=False, error=str(exc) or type(exc).__name__)
