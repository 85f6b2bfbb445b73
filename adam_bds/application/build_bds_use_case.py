"""Build a BDS Finding dataset and its vignette.

load inputs -> run vignette steps -> integrity checks -> render HTML ->
export the dataset (XPT, CSV)
"""

from __future__ import annotations

from collections.abc import Sequence
import traceback
from typing import TYPE_CHECKING

from ..constants import Domains
from ..infrastructure.io.xpt_writer import write_xpt_file
from ..infrastructure.repositories import SourceDataRepository
from ..pandas_utils import added_columns
from ..transformations.base import TransformationContext
from ..validators.integrity import check_integrity
from ..vignette.bds_finding import STEPS, VignetteState, VignetteStep
from ..vignette.renderer import VignetteRenderer
from .models import BuildBdsResponse, StepResult

if TYPE_CHECKING:
    from pathlib import Path

    import pandas as pd

    from .models import BuildBdsRequest
    from .ports.services import LoggerPort

VERBOSE_TRACEBACK_LEVEL = 2


class BuildStepError(RuntimeError):
    def __init__(self, title: str, errors: Sequence[str]):
        self.title = title
        self.errors = list(errors)
        super().__init__(f"Step '{title}' failed: {'; '.join(self.errors)}")


class BuildBdsUseCase:
    """Run the vignette for one findings domain and write its outputs.

    Example:
        >>> use_case = BuildBdsUseCase(logger=NullLogger())
        >>> response = use_case.execute(BuildBdsRequest(domain="LB", output_formats={"html"}))
        >>> response.html_path
        PosixPath('output/adlb.html')
    """

    def __init__(
        self,
        logger: LoggerPort,
        repository: SourceDataRepository | None = None,
        steps: Sequence[VignetteStep] = STEPS,
    ) -> None:
        super().__init__()
        self.logger = logger
        self._repository = repository
        self.steps = list(steps)

    def execute(self, request: BuildBdsRequest) -> BuildBdsResponse:
        domain = request.domain.upper()
        dataset = Domains.DATASET_NAMES.get(domain, f"AD{domain}")
        response = BuildBdsResponse(dataset=dataset, domain=domain)
        try:
            if domain not in Domains.SUPPORTED:
                raise ValueError(
                    f"Unsupported domain {domain!r}; expected one of "
                    f"{', '.join(Domains.SUPPORTED)}"
                )
            repository = self._repository or SourceDataRepository(request.data_dir)
            self.logger.log_build_start(dataset, domain, repository.source_label)

            adsl = repository.load_adsl()
            self.logger.log_dataset_loaded("ADSL", len(adsl), len(adsl.columns))
            source = repository.load_findings(domain)
            self.logger.log_dataset_loaded(domain, len(source), len(source.columns))

            state = VignetteState(
                adsl=adsl,
                source=source,
                context=TransformationContext(
                    domain=domain, dataset=dataset, study_id=_study_id(source)
                ),
                config=request.config,
                fail_safe=request.fail_safe,
            )
            for step in self.steps:
                step_result = self._run_step(step, state, request)
                response.steps.append(step_result)
                response.warnings.extend(step_result.warnings)

            response.data = state.data
            response.lookup = state.lookup
            if state.lookup is not None:
                report = check_integrity(source, state.data, state.lookup, domain)
                response.integrity = report
                for issue in report.issues:
                    self.logger.error(f"Integrity check {issue.check}: {issue.message}")
                if report.passed:
                    self.logger.success("Integrity checks passed")

            self._write_outputs(response, state, request, repository.source_label)
            if response.integrity is not None and not request.fail_safe:
                response.integrity.raise_for_issues()
            self.logger.log_build_complete(
                dataset, len(state.data), len(state.data.columns)
            )
        except Exception as exc:
            response.success = False
            response.error = str(exc)
            self.logger.error(f"{dataset}: {exc}")
            if request.verbose >= VERBOSE_TRACEBACK_LEVEL:
                self.logger.error(traceback.format_exc())
        return response

    def _run_step(
        self, step: VignetteStep, state: VignetteState, request: BuildBdsRequest
    ) -> StepResult:
        before = state.data
        result = step.run(state)
        step_result = StepResult(
            key=step.key,
            title=step.title,
            narrative=step.narrative,
            code=step.source,
            applied=result.applied,
            message=result.message,
            input_rows=len(before),
            output_rows=len(result.data),
            added_columns=added_columns(before, result.data),
            warnings=list(result.warnings),
            errors=list(result.errors),
        )
        for warning in result.warnings:
            self.logger.warning(f"{step.title}: {warning}")
        if result.errors and not request.fail_safe:
            raise BuildStepError(step.title, result.errors)
        for error in result.errors:
            self.logger.error(f"{step.title}: {error}")

        if result.applied:
            state.data = result.data
        columns = step.preview_columns(state.domain, state.data)
        step_result.preview = state.data.loc[:, columns].head(
            request.config.preview_rows
        )
        self.logger.log_step_complete(
            step.title,
            step_result.input_rows,
            step_result.output_rows,
            step_result.added_columns,
        )
        return step_result

    def _write_outputs(
        self,
        response: BuildBdsResponse,
        state: VignetteState,
        request: BuildBdsRequest,
        source_label: str,
    ) -> None:
        output_dir = request.output_dir
        stem = response.dataset.lower()
        if "html" in request.output_formats:
            renderer = VignetteRenderer(preview_rows=request.config.preview_rows)
            response.html_path = renderer.write(
                output_dir / f"{stem}.html",
                dataset=response.dataset,
                domain=response.domain,
                source=source_label,
                steps=response.steps,
                lookup=response.lookup,
                integrity=response.integrity,
            )
            self._log_written(response.html_path)
        if "xpt" in request.output_formats:
            response.xpt_path = write_xpt_file(
                state.data, response.dataset, output_dir / f"{stem}.xpt"
            )
            self._log_written(response.xpt_path)
        if "csv" in request.output_formats:
            csv_path = output_dir / f"{stem}.csv"
            csv_path.parent.mkdir(parents=True, exist_ok=True)
            state.data.to_csv(csv_path, index=False)
            response.csv_path = csv_path
            self._log_written(csv_path)

    def _log_written(self, path: Path) -> None:
        self.logger.success(f"Wrote {path}")


def _study_id(source: pd.DataFrame) -> str | None:
    if "STUDYID" not in source.columns:
        return None
    values = source["STUDYID"].dropna()
    return str(values.iloc[0]) if not values.empty else None
