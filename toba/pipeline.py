"""Step pipeline: sequential stages, parallel stages and dependency graphs."""

from __future__ import annotations

import queue
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Protocol

from toba.context import Context
from toba.errors import CodedError
from toba.logger import Logger, synchronized


class Step(Protocol):
    name: str

    def run(self, ctx: Context) -> None: ...


@dataclass
class Stage:
    """A named group of steps, run one after another or all at once."""

    name: str = ""
    steps: list[Step] = field(default_factory=list)
    parallel: bool = False


@dataclass
class StepNode:
    """A step in a dependency graph, identified by id."""

    id: str
    step: Step | None
    depends_on: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class StepTiming:
    """When a step ran and how long it took."""

    stage: str
    name: str
    started_at: datetime
    finished_at: datetime
    duration: timedelta


TimingRecorder = Callable[[StepTiming], None]


def _run_step(ctx: Context, stage: str, step: Step) -> tuple[StepTiming, Exception | None]:
    started_at = datetime.now()
    began = time.perf_counter()
    error: Exception | None = None
    try:
        step.run(ctx)
    except Exception as exc:
        error = exc
    elapsed = timedelta(seconds=time.perf_counter() - began)
    timing = StepTiming(
        stage=stage,
        name=step.name,
        started_at=started_at,
        finished_at=started_at + elapsed,
        duration=elapsed,
    )
    return timing, error


def _find_coded(error: BaseException) -> CodedError | None:
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        if isinstance(current, CodedError):
            return current
        seen.add(id(current))
        current = current.__cause__
    return None


def _log_step_error(logger: Logger, step: Step, error: Exception) -> None:
    message = f"{step.name}: {error}"
    coded = _find_coded(error)
    if coded is not None:
        logger.error_code(coded.code, message)
    else:
        logger.error(message)


@dataclass
class _NodeState:
    node: StepNode
    index: int
    remaining: int
    dependents: list[str] = field(default_factory=list)


@dataclass
class Pipeline:
    """Runs steps, stages or a dependency graph of nodes."""

    steps: list[Step] = field(default_factory=list)
    stages: list[Stage] = field(default_factory=list)
    nodes: list[StepNode] = field(default_factory=list)
    recorder: TimingRecorder | None = None

    def run(self, ctx: Context | None) -> None:
        """Run the pipeline, raising the first step error.

        Nodes take precedence over stages, and stages over plain steps.
        """
        if ctx is None:
            return

        original_logger = ctx.logger
        ctx.logger = synchronized(original_logger)
        try:
            if self.nodes:
                self._run_graph(ctx)
                return
            for stage in self._stages():
                if stage.parallel:
                    self._run_parallel_stage(ctx, stage)
                else:
                    self._run_sequential_stage(ctx, stage)
        finally:
            ctx.logger = original_logger

    def _stages(self) -> list[Stage]:
        if self.stages:
            return self.stages
        if self.steps:
            return [Stage(steps=list(self.steps))]
        return []

    def _record(self, timing: StepTiming) -> None:
        if self.recorder is not None:
            self.recorder(timing)

    def _run_sequential_stage(self, ctx: Context, stage: Stage) -> None:
        for step in stage.steps:
            ctx.logger.step(step.name)
            timing, error = _run_step(ctx, stage.name, step)
            self._record(timing)
            if error is not None:
                _log_step_error(ctx.logger, step, error)
                raise error
            ctx.logger.success(step.name)

    def _run_parallel_stage(self, ctx: Context, stage: Stage) -> None:
        if not stage.steps:
            return
        for step in stage.steps:
            ctx.logger.step(step.name)
        with ThreadPoolExecutor(max_workers=len(stage.steps)) as pool:
            outcomes = list(pool.map(lambda step: _run_step(ctx, stage.name, step), stage.steps))

        first_error: Exception | None = None
        for step, (timing, error) in zip(stage.steps, outcomes):
            self._record(timing)
            if error is not None:
                _log_step_error(ctx.logger, step, error)
                if first_error is None:
                    first_error = error
            else:
                ctx.logger.success(step.name)

        if first_error is not None:
            raise first_error

    def _run_graph(self, ctx: Context) -> None:
        states: dict[str, _NodeState] = {}
        for index, node in enumerate(self.nodes):
            if node.step is None:
                raise ValueError("pipeline node step is nil")
            node_id = node.id or node.step.name
            if node_id in states:
                raise ValueError("duplicate pipeline node id: " + node_id)
            states[node_id] = _NodeState(
                node=StepNode(id=node_id, step=node.step, depends_on=list(node.depends_on)),
                index=index,
                remaining=len(node.depends_on),
            )

        for state in states.values():
            for dependency in state.node.depends_on:
                parent = states.get(dependency)
                if parent is None:
                    raise ValueError("unknown pipeline dependency: " + dependency)
                parent.dependents.append(state.node.id)

        def by_index(state: _NodeState) -> int:
            return state.index

        ready = sorted((state for state in states.values() if state.remaining == 0), key=by_index)
        results: queue.Queue[tuple[_NodeState, StepTiming, Exception | None]] = queue.Queue()
        running = 0
        completed = 0
        stop_scheduling = False
        first_error: Exception | None = None
        first_error_index = len(self.nodes)

        def start(state: _NodeState) -> None:
            ctx.logger.step(state.node.step.name)

            def work() -> None:
                timing, error = _run_step(ctx, state.node.id, state.node.step)
                results.put((state, timing, error))

            threading.Thread(target=work, name=f"step-{state.node.id}", daemon=True).start()

        while True:
            while not stop_scheduling and ready:
                start(ready.pop(0))
                running += 1

            if running == 0:
                break

            state, timing, error = results.get()
            running -= 1
            completed += 1

            self._record(timing)
            if error is not None:
                _log_step_error(ctx.logger, state.node.step, error)
                stop_scheduling = True
                if first_error is None or state.index < first_error_index:
                    first_error = error
                    first_error_index = state.index
                continue

            ctx.logger.success(state.node.step.name)

            if stop_scheduling:
                continue

            for dependent_id in state.dependents:
                dependent = states[dependent_id]
                dependent.remaining -= 1
                if dependent.remaining == 0:
                    ready.append(dependent)
            ready.sort(key=by_index)

        if first_error is not None:
            raise first_error

        if completed != len(states):
            raise RuntimeError(
                "pipeline dependency graph did not complete; check for dependency cycles"
            )