# src/dataflows/core/engine/engine.py
"""
Engine de execução de dataflows.

Uma vez criado, o Engine pode ser executado de uma só vez (`execute()`)
ou passo a passo (`execute_step()`). Em qualquer modo, o chamador deve
observar o status ABORTED além das exceções: o abort registra o estado
e também relança a falha.

Escalonamento (pull, cooperativo, uma thread):
- `initialise()` semeia a fila com os sinks.
- Cada `execute_step()` retira o step da frente da fila (FIFO), chama
  `go()` e muta a fila conforme o status retornado:
    BLOCKED / WAITING   → enfileira todos os upstreams
    FINISHED / CANCELLED → enfileira todos os downstreams
    FLOWING             → enfileira apenas downstreams flow
    ABORTED             → protocolo de abort
- Não há deduplicação: um step pode estar na fila mais de uma vez.
- Não há timeout: um step bloqueado para sempre mantém a run em laço,
  a menos que se cancele ou aborte.

Ajustes em relação à run clássica:
- `run()` devolve um RunOutcome (status + exceção + payload serializável)
  para chamadores que não querem depender de exceções.
- Uma run abortada mantém ABORTED após `finalise()`.
"""

from __future__ import annotations

from collections import deque
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Deque, Dict, List, Optional, Tuple

from dataflows.core.config.store import GlobalVarsStore
from dataflows.core.errors import (
    DataflowErrorPayload,
    engine_bad_status,
    engine_execution_error,
    engine_unexpected_step_status,
    step_aborted,
)
from dataflows.core.exceptions import (
    BadEngineStatusError,
    DataflowException,
    EngineConfigurationError,
    EngineExecutionError,
    UnexpectedStepStatusError,
)
from dataflows.core.pipeline.context import RunContext
from dataflows.core.pipeline.definition import Dataflow, DataflowStore
from dataflows.core.pipeline.registry import StepTypeRegistry
from dataflows.core.pipeline.step import EngineStep
from dataflows.core.pipeline.types import EngineStatus

from .flowcaps import inject_flow_caps
from .graph import StepGraph


RUNNABLE = (EngineStatus.INITIALISED, EngineStatus.PROCESSING)


@dataclass(frozen=True)
class RunOutcome:
    """Resultado assentado de uma run: status final, falha e payload serializável."""

    status: EngineStatus
    exception: Optional[BaseException] = None
    error: Optional[DataflowErrorPayload] = None

    @property
    def ok(self) -> bool:
        return self.exception is None


class Engine:
    """Engine canônico do dataflows (grafo + fila + ciclo de vida)."""

    def __init__(
        self,
        dataflow: Dataflow,
        *,
        ctx: RunContext,
        registry: StepTypeRegistry,
        isdryrun: bool = False,
        automated: bool = True,
        store: Optional[DataflowStore] = None,
        global_vars: Optional[GlobalVarsStore] = None,
    ):
        self._dataflow = dataflow
        self._ctx = ctx
        self._isdryrun = bool(isdryrun)
        self._automated = bool(automated)
        self._store = store
        self._global_vars = global_vars if global_vars is not None else GlobalVarsStore.from_config(ctx.config)

        self._status = EngineStatus.NEW
        self._exception: Optional[BaseException] = None
        self._aborted_by: Optional[str] = None
        self._queue: Deque[EngineStep] = deque()

        # Tipos desconhecidos falham antes de qualquer engine step existir
        registry.validate(dataflow)

        self._graph = StepGraph()
        self._steps: Dict[str, EngineStep] = {}
        for stepdef in dataflow.steps:
            step = registry.get(stepdef.type).get_engine_step(self, stepdef)
            if step.id != stepdef.id:
                raise EngineConfigurationError(
                    message="Engine step com id divergente da definição",
                    details={"expected": stepdef.id, "received": step.id},
                )
            step.bind(self._graph, self._graph.add(step))
            self._steps[stepdef.id] = step

        for step_id in self._steps:
            for dep in dataflow.dependencies(dataflow.get_step(step_id)):
                self._graph.link(self._graph.index_of(dep.id), self._graph.index_of(step_id))

        self._sinks: List[EngineStep] = [s for s in self._steps.values() if len(s.downstreams) == 0]
        self._flowcaps: List[EngineStep] = inject_flow_caps(self, self._graph)
        self._graph.freeze()

        self.log("Created", steps=len(self._steps), flowcaps=len(self._flowcaps))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def status(self) -> EngineStatus:
        return self._status

    @property
    def exception(self) -> Optional[BaseException]:
        return self._exception

    @property
    def isdryrun(self) -> bool:
        return self._isdryrun

    @property
    def automated(self) -> bool:
        return self._automated

    @property
    def dataflow(self) -> Dataflow:
        return self._dataflow

    @property
    def name(self) -> str:
        return self._dataflow.name

    @property
    def ctx(self) -> RunContext:
        return self._ctx

    @property
    def queue(self) -> Tuple[EngineStep, ...]:
        return tuple(self._queue)

    @property
    def sinks(self) -> Tuple[EngineStep, ...]:
        return tuple(self._sinks)

    @property
    def steps(self) -> Dict[str, EngineStep]:
        return dict(self._steps)

    @property
    def flowcaps(self) -> Tuple[EngineStep, ...]:
        return tuple(self._flowcaps)

    def all_steps(self) -> List[EngineStep]:
        """Steps do usuário seguidos dos flow caps, em ordem de construção."""
        return self._graph.nodes()

    # ------------------------------------------------------------------
    # Ciclo de vida
    # ------------------------------------------------------------------
    def initialise(self) -> None:
        for step in self.all_steps():
            try:
                step.initialise()
            except Exception as e:
                self._aborted_by = step.id
                self.abort(e)

        self._queue = deque(self._sinks)
        self._status = EngineStatus.INITIALISED
        self.log(f"Initialised. Dry run: {'Yes' if self._isdryrun else 'No'}")

    def _can_execute(self) -> bool:
        if self._dataflow.enabled:
            return True
        # desabilitado: apenas gatilho manual ou dry run
        return not self._automated or self._isdryrun

    def execute(self) -> None:
        """Inicializa, executa até FINISHED (ou ABORTED) e finaliza."""
        try:
            self.initialise()
            if not self._can_execute():
                self.log("Skipped: dataflow is disabled", automated=self._automated)
                return
            while self._status != EngineStatus.FINISHED:
                self.execute_step()
                if self._status == EngineStatus.ABORTED:
                    return
        finally:
            self.finalise()

    def execute_step(self) -> EngineStatus:
        """Executa um único step da fila. Exige initialise() prévio; não finaliza."""
        if self._status == EngineStatus.INITIALISED:
            self._status = EngineStatus.PROCESSING
        if self._status != EngineStatus.PROCESSING:
            payload = engine_bad_status(
                status=self._status.label,
                allowed=[s.label for s in RUNNABLE],
            )
            raise BadEngineStatusError(message=payload.message, details=payload.details, hint=payload.hint)

        if not self._queue:
            self._status = EngineStatus.FINISHED
            self.log("Finished")
            return self._status

        step = self._queue.popleft()
        try:
            result = step.go()
        except Exception as e:
            self._aborted_by = step.id
            self.abort(e)

        if not isinstance(result, EngineStatus) or result not in _QUEUE_POLICY:
            payload = engine_unexpected_step_status(step=step.id, returned=result)
            self._aborted_by = step.id
            self.abort(UnexpectedStepStatusError(message=payload.message, details=payload.details, hint=payload.hint))

        self.log(f"status {result.label}", step_id=step.id, status=result.label)

        if result == EngineStatus.ABORTED:
            self._aborted_by = step.id
            failure = step.exception or EngineExecutionError(
                message=f"Step '{step.id}' abortou sem exceção de origem",
                details={"step_id": step.id},
            )
            self.abort(failure)

        self._queue.extend(_QUEUE_POLICY[result](self, step))
        return self._status

    def finalise(self) -> None:
        """Libera recursos de todos os steps. Seguro após finish ou abort."""
        first_error: Optional[Exception] = None
        for step in self.all_steps():
            try:
                step.finalise()
            except Exception as e:
                self.log(f"Finalise hook failed: {e}", level="error", step_id=step.id)
                first_error = first_error or e

        if self._status != EngineStatus.ABORTED:
            self._status = EngineStatus.FINALISED
        self.log("Finalised", status=self._status.label)

        # uma run abortada já relança a falha de origem
        if first_error is not None and self._status != EngineStatus.ABORTED:
            raise first_error

    def abort(self, failure: Optional[BaseException] = None) -> None:
        """Interrompe a run imediatamente e relança `failure` após os hooks de abort."""
        if self._status == EngineStatus.ABORTED:
            raise self._exception  # type: ignore[misc]

        if failure is None:
            failure = EngineExecutionError(message="Execução abortada sem exceção de origem")

        self._exception = failure
        for step in self.all_steps():
            try:
                step.abort()
            except Exception as e:
                self.log(f"Abort hook failed: {e}", level="error", step_id=step.id)

        self._status = EngineStatus.ABORTED
        self.log(f"Aborted: {failure}", level="error", exc_type=failure.__class__.__name__)
        raise failure

    def run(self) -> RunOutcome:
        """Executa a run e devolve o resultado assentado em vez de relançar o abort."""
        try:
            self.execute()
        except Exception as e:
            if self._status != EngineStatus.ABORTED or e is not self._exception:
                raise
            return RunOutcome(status=self._status, exception=e, error=self._exception_to_error(e))
        return RunOutcome(status=self._status)

    def _exception_to_error(self, exc: BaseException) -> DataflowErrorPayload:
        """Converte a falha do abort em DataflowErrorPayload (serializável)."""
        if isinstance(exc, DataflowException):
            details = dict(exc.details or {})
            if self._aborted_by is not None:
                details.setdefault("step", self._aborted_by)
            return DataflowErrorPayload(
                type=exc.code or exc.__class__.__name__,
                message=str(exc) or "Erro de execução",
                details=details,
                hint=exc.hint,
            )

        if self._aborted_by is not None:
            return step_aborted(
                step=self._aborted_by,
                exc_type=exc.__class__.__name__,
                exc_message=str(exc),
            )

        return engine_execution_error(exc_type=exc.__class__.__name__, exc_message=str(exc))

    # ------------------------------------------------------------------
    # Logging & variáveis
    # ------------------------------------------------------------------
    def log(self, message: str, *, level: str = "info", step_id: Optional[str] = None, **extra: Any) -> None:
        self._ctx.log(step_id=step_id, level=level, message=message, dataflow=self._dataflow.name, **extra)

    def get_variables(self) -> Dict[str, Any]:
        return {
            "global": self._global_vars.load(),
            "dataflow": deepcopy(self._dataflow.variables),
        }

    def set_dataflow_var(self, name: str, value: Any) -> None:
        """Define uma variável do dataflow; persiste apenas fora de dry run."""
        previous = self._dataflow.variables.get(name, "")
        self.log(f"Setting dataflow '{name}' to '{value}' (from '{previous}')")
        self._dataflow.set_var(name, value)

        if not self._isdryrun and self._store is not None:
            self._store.save(self._dataflow)

    def set_global_var(self, name: str, value: Any) -> None:
        """Define uma variável global; sempre persistida, inclusive em dry run."""
        previous = self._global_vars.set_var(name, value)
        self.log(f"Setting global '{name}' to '{value}' (from '{'' if previous is None else previous}')")

    # ------------------------------------------------------------------
    # Fila
    # ------------------------------------------------------------------
    def _upstreams(self, step: EngineStep) -> List[EngineStep]:
        return list(self._graph.upstreams_of(self._graph.index_of(step.id)).values())

    def _downstreams(self, step: EngineStep) -> List[EngineStep]:
        return list(self._graph.downstreams_of(self._graph.index_of(step.id)).values())


_QUEUE_POLICY = {
    EngineStatus.BLOCKED: Engine._upstreams,
    EngineStatus.WAITING: Engine._upstreams,
    EngineStatus.FINISHED: Engine._downstreams,
    EngineStatus.CANCELLED: Engine._downstreams,
    EngineStatus.FLOWING: lambda engine, step: [d for d in engine._downstreams(step) if d.is_flow],
    EngineStatus.ABORTED: lambda engine, step: [],
}
