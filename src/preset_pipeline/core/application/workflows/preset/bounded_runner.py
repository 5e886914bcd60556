import asyncio
from collections.abc import Iterable

from preset_pipeline.core.application.workflows.base_workflow import BaseWorkflow
from preset_pipeline.core.domain.pipeline import PipelineInput, PipelineResult

DEFAULT_CONCURRENCY = 5


async def run_bounded(
    workflow: BaseWorkflow[PipelineInput, PipelineResult],
    inputs: Iterable[PipelineInput],
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[PipelineResult]:
    """Run several pipeline invocations with at most *concurrency* in flight.

    Results keep the order of *inputs*. An input error aborts the batch.
    """
    if concurrency < 1:
        raise ValueError("concurrency must be >= 1")
    semaphore = asyncio.Semaphore(concurrency)

    async def _run_one(pipeline_input: PipelineInput) -> PipelineResult:
        async with semaphore:
            return await workflow.execute(pipeline_input)

    return list(await asyncio.gather(*(_run_one(item) for item in inputs)))
