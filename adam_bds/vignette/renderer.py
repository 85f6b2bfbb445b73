"""HTML rendering of the BDS Finding vignette."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, StrictUndefined
import pandas as pd

from ..constants import Defaults, Domains
from .templates import VIGNETTE_HTML_TEMPLATE

if TYPE_CHECKING:
    from ..application.models import StepResult
    from ..validators.integrity import IntegrityReport


def frame_to_html(frame: pd.DataFrame, rows: int = Defaults.PREVIEW_ROWS) -> str:
    """Render the first ``rows`` rows of a table; missing values print blank."""
    return frame.head(rows).to_html(
        index=False, na_rep="", border=0, classes="preview", escape=True
    )


@dataclass(frozen=True, slots=True)
class _RenderedStep:
    key: str
    title: str
    narrative: str
    code: str
    applied: bool
    message: str
    input_rows: int
    output_rows: int
    added_columns: list[str]
    warnings: list[str]
    errors: list[str]
    preview_html: str


class VignetteRenderer:
    """Render step results, the parameter lookup and integrity checks to HTML.

    Example:
        >>> renderer = VignetteRenderer(preview_rows=5)
        >>> html = renderer.render(dataset="ADLB", domain="LB", source="sample", steps=steps)
    """

    def __init__(self, preview_rows: int = Defaults.PREVIEW_ROWS) -> None:
        self.preview_rows = preview_rows
        self._env = Environment(
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=True,
            undefined=StrictUndefined,
        )
        self._template = self._env.from_string(VIGNETTE_HTML_TEMPLATE)

    def render(
        self,
        *,
        dataset: str,
        domain: str,
        source: str,
        steps: Sequence[StepResult],
        lookup: pd.DataFrame | None = None,
        integrity: IntegrityReport | None = None,
    ) -> str:
        rendered_steps = [
            _RenderedStep(
                key=step.key,
                title=step.title,
                narrative=step.narrative,
                code=step.code,
                applied=step.applied,
                message=step.message,
                input_rows=step.input_rows,
                output_rows=step.output_rows,
                added_columns=list(step.added_columns),
                warnings=list(step.warnings),
                errors=list(step.errors),
                preview_html=(
                    frame_to_html(step.preview, self.preview_rows)
                    if step.preview is not None and not step.preview.empty
                    else ""
                ),
            )
            for step in steps
        ]
        return self._template.render(
            dataset=dataset,
            domain=domain,
            description=Domains.DESCRIPTIONS.get(domain.upper(), dataset),
            source=source,
            timestamp=datetime.now(UTC).isoformat(timespec="seconds"),
            steps=rendered_steps,
            lookup_html=frame_to_html(lookup, len(lookup)) if lookup is not None else "",
            integrity=integrity,
        )

    def write(self, path: Path, **kwargs: object) -> Path:
        """Render and write the HTML document, creating parent directories."""
        html = self.render(**kwargs)  # type: ignore[arg-type]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        return path
