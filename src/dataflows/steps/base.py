"""Engine steps genéricos do dataflows.

Responsabilidades:
- Implementar o contrato `EngineStep` consumido pelo Engine.
- Traduzir o estado dos upstreams em um único status por chamada de `go()`.
- Capturar falhas de `execute()` como ABORTED (a exceção fica em `exception`).

Variantes:
- ConnectorEngineStep: uma unidade discreta de trabalho por run.
  Sinaliza BLOCKED / FINISHED / CANCELLED.
- FlowEngineStep: processa um registro por ativação dentro de um bloco de flow.
  Sinaliza WAITING / FLOWING / FINISHED / CANCELLED.

Protocolo de pull dos flows:
- Cada flow guarda quantos registros produziu (`produced`) e quantos consumiu
  de cada upstream flow.
- Enquanto algum downstream flow não consumiu o último registro, o step
  responde FLOWING sem produzir nada novo.
- Um flow sem downstream flow (ex.: flow cap) responde WAITING após consumir,
  puxando o próximo registro.
- Uma fonte sem flows em volta (só connectors a jusante) lê todos os
  registros em uma única ativação e termina em FINISHED.
- Um pedido de registro (WAITING) fica pendente até ser atendido; ativações
  repetidas sem novidade respondem FLOWING e são absorvidas no fim do bloco.

Limites explícitos:
- NÃO contém lógica de domínio (leitura, escrita, transformação concreta).
- NÃO muta a fila nem o status do Engine.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, Mapping, Optional

from dataflows.core.pipeline.definition import StepDefinition
from dataflows.core.pipeline.types import EngineStatus


class BaseEngineStep:
    """Engine step base: identidade, ligações no grafo, ciclo de vida e log."""

    is_flow = False

    def __init__(self, engine: Any, stepdef: StepDefinition):
        self.engine = engine
        self.stepdef = stepdef
        self.id: str = stepdef.id
        self.name: str = stepdef.name
        self.status: EngineStatus = EngineStatus.NEW
        self.exception: Optional[BaseException] = None
        self._graph: Any = None
        self._index: Optional[int] = None
        self._finalised = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id} {self.status.label}>"

    # ------------------------------------------------------------------
    # Grafo
    # ------------------------------------------------------------------
    def bind(self, graph: Any, index: int) -> None:
        self._graph = graph
        self._index = index

    @property
    def upstreams(self) -> Mapping[str, Any]:
        if self._graph is None:
            return {}
        return self._graph.upstreams_of(self._index)

    @property
    def downstreams(self) -> Mapping[str, Any]:
        if self._graph is None:
            return {}
        return self._graph.downstreams_of(self._index)

    @property
    def config(self) -> Dict[str, Any]:
        return self.stepdef.config

    # ------------------------------------------------------------------
    # Ciclo de vida
    # ------------------------------------------------------------------
    def log(self, message: str, *, level: str = "info", **extra: Any) -> None:
        self.engine.log(message, level=level, step_id=self.id, **extra)

    def initialise(self) -> None:
        self.on_initialise()
        self.status = EngineStatus.INITIALISED

    def go(self) -> EngineStatus:
        raise NotImplementedError

    def abort(self) -> None:
        self.on_abort()
        self.status = EngineStatus.ABORTED

    def finalise(self) -> None:
        if self._finalised:
            return
        self.on_finalise()
        self._finalised = True
        if self.status != EngineStatus.ABORTED:
            self.status = EngineStatus.FINALISED

    # extension points
    def on_initialise(self) -> None:
        pass

    def on_abort(self) -> None:
        pass

    def on_finalise(self) -> None:
        pass

    def _fail(self, exc: BaseException) -> EngineStatus:
        self.exception = exc
        self.status = EngineStatus.ABORTED
        self.log(f"Failed: {exc}", level="error", exc_type=exc.__class__.__name__)
        return self.status

    def _gate(self, upstreams: Iterable[Any], blocked: EngineStatus) -> Optional[EngineStatus]:
        """Status de espera/cancelamento imposto por upstreams, ou None se liberado."""
        ups = list(upstreams)
        if any(u.status == EngineStatus.CANCELLED for u in ups):
            return EngineStatus.CANCELLED
        if not all(u.status == EngineStatus.FINISHED for u in ups):
            return blocked
        return None


class ConnectorEngineStep(BaseEngineStep):
    """Connector: executa `execute()` uma vez, quando todos os upstreams terminaram.

    `execute()` retornando False cancela o step (downstreams são cancelados em cascata).
    """

    def go(self) -> EngineStatus:
        if self.status.is_terminal:
            return self.status

        gated = self._gate(self.upstreams.values(), EngineStatus.BLOCKED)
        if gated is not None:
            self.status = gated
            return self.status

        self.status = EngineStatus.PROCESSING
        try:
            result = self.execute()
        except Exception as e:
            return self._fail(e)

        self.status = EngineStatus.CANCELLED if result is False else EngineStatus.FINISHED
        return self.status

    def execute(self) -> Any:
        raise NotImplementedError


class FlowEngineStep(BaseEngineStep):
    """Flow: um registro por ativação, puxado a partir do fim do bloco."""

    is_flow = True

    def __init__(self, engine: Any, stepdef: StepDefinition):
        super().__init__(engine, stepdef)
        self.value: Any = None
        self.produced = 0
        self._consumed: Dict[str, int] = {}
        self._awaiting = False
        self._iterator: Optional[Iterator[Any]] = None

    def consumed_from(self, upstream_id: str) -> int:
        return self._consumed.get(upstream_id, 0)

    def records(self) -> Iterable[Any]:
        """Fonte de registros para flows sem upstream flow."""
        raise NotImplementedError

    def execute(self, record: Any) -> Any:
        """Transforma um registro; None descarta o registro."""
        return record

    def on_abort(self) -> None:
        self._close_iterator()

    def on_finalise(self) -> None:
        self._close_iterator()

    def _close_iterator(self) -> None:
        close = getattr(self._iterator, "close", None)
        if close is not None:
            close()
        self._iterator = None

    @property
    def _flow_downstreams(self):
        return [d for d in self.downstreams.values() if d.is_flow]

    def _has_pending_output(self) -> bool:
        return any(d.consumed_from(self.id) < self.produced for d in self._flow_downstreams)

    def go(self) -> EngineStatus:
        if self.status.is_terminal:
            return self.status

        if self._has_pending_output():
            self.status = EngineStatus.FLOWING
            return self.status

        ups = list(self.upstreams.values())
        gated = self._gate([u for u in ups if not u.is_flow], EngineStatus.WAITING)
        if gated is not None:
            self.status = gated
            return self.status

        try:
            flows = [u for u in ups if u.is_flow]
            if flows:
                self.status = self._pull_upstream(flows)
            else:
                self.status = self._pull_source()
        except Exception as e:
            return self._fail(e)
        return self.status

    def _pull_source(self) -> EngineStatus:
        if self._iterator is None:
            self._iterator = iter(self.records())
        try:
            record = next(self._iterator)
        except StopIteration:
            return EngineStatus.FINISHED
        if not self._flow_downstreams:
            return self._drain_source(record)
        return self._emit(record)

    def _drain_source(self, first: Any) -> EngineStatus:
        # sem flows em volta não há quem puxe o próximo registro
        self._emit(first)
        for record in self._iterator:
            self._emit(record)
        return EngineStatus.FINISHED

    def _pull_upstream(self, flows) -> EngineStatus:
        for up in flows:
            if up.produced > self.consumed_from(up.id):
                self._consumed[up.id] = up.produced
                result = self.execute(up.value)
                if result is None:
                    self._awaiting = True
                    return EngineStatus.WAITING
                return self._emit(result)

        gated = self._gate(flows, EngineStatus.WAITING)
        if gated is not None and gated != EngineStatus.WAITING:
            return gated
        if gated is None:
            return EngineStatus.FINISHED

        # pedido já feito e ainda não atendido
        if self._awaiting:
            return EngineStatus.FLOWING
        self._awaiting = True
        return EngineStatus.WAITING

    def _emit(self, record: Any) -> EngineStatus:
        self.value = record
        self.produced += 1
        if not self._flow_downstreams:
            self._awaiting = True
            return EngineStatus.WAITING
        self._awaiting = False
        return EngineStatus.FLOWING


class StepTypeBase:
    """Fábrica de engine steps associada a uma classe de engine step."""

    engine_step_class = BaseEngineStep

    @property
    def is_flow(self) -> bool:
        return bool(self.engine_step_class.is_flow)

    def get_engine_step(self, engine: Any, stepdef: StepDefinition) -> BaseEngineStep:
        return self.engine_step_class(engine, stepdef)


class ConnectorStepType(StepTypeBase):
    engine_step_class = ConnectorEngineStep


class FlowStepType(StepTypeBase):
    engine_step_class = FlowEngineStep
