"""
Per-record builder contract shared by every output format.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping, Optional, Sequence, Union

import structlog

from ..record import ThrownInfo
from ..types import GeneratorState, GeneratorStateError

logger = structlog.get_logger(__name__)

Thrown = Union[ThrownInfo, BaseException]


class Generator(ABC):
    """
    Builds the serialized form of one log record.

    A generator is driven through ``begin()``, any number of ``add*`` calls
    and a final ``build()``. The lifecycle is enforced here for every output
    format; subclasses only implement the ``_begin``/``_add*``/``_build``
    primitives. Instances are single use and must be driven by one thread.
    """

    def __init__(self):
        self._state = GeneratorState.CREATED

    @property
    def state(self) -> GeneratorState:
        return self._state

    def begin(self) -> "Generator":
        """Open the root element representing one record."""
        self._require(GeneratorState.CREATED, "begin")
        self._begin()
        self._state = GeneratorState.BEGUN
        return self

    def add(self, key: str, value: Any) -> "Generator":
        """
        Add a scalar field.

        A ``None`` value is written as an empty field; anything else is
        written using its ``str()`` form.
        """
        self._require(GeneratorState.BEGUN, "add")
        self._add(key, value)
        return self

    def add_array(self, key: str, element_key: str, values: Optional[Sequence[Any]]) -> "Generator":
        """
        Add an ordered array of scalars.

        Args:
            key: Name of the container field
            element_key: Name given to each array slot
            values: The array; ``None`` writes an empty container field

        Returns:
            This generator
        """
        self._require(GeneratorState.BEGUN, "add_array")
        self._add_array(key, element_key, values)
        return self

    def add_map(self, key: str, values: Optional[Mapping[str, Any]]) -> "Generator":
        """Add a mapping, one child per entry in iteration order."""
        self._require(GeneratorState.BEGUN, "add_map")
        self._add_map(key, values)
        return self

    def add_stack_trace(self, thrown: Thrown) -> "Generator":
        """Add a thrown exception, its frames and its chain of causes."""
        self._require(GeneratorState.BEGUN, "add_stack_trace")
        if isinstance(thrown, BaseException):
            thrown = ThrownInfo.from_exception(thrown)
        self._add_stack_trace(thrown)
        return self

    def build(self) -> str:
        """Finish the record and return its serialized text."""
        self._require(GeneratorState.BEGUN, "build")
        self._state = GeneratorState.BUILT
        return self._build()

    def _require(self, expected: GeneratorState, operation: str) -> None:
        if self._state is not expected:
            raise GeneratorStateError(
                f"Cannot call {operation}() on a generator in state '{self._state.value}'",
                state=self._state,
            )

    def _best_effort(self, action: Callable[[], None], description: str) -> None:
        """
        Run a finalization step whose failure must not lose a built record.

        The record text is already complete when this runs, so errors are
        logged and discarded here rather than propagated.
        """
        try:
            action()
        except Exception as e:
            logger.debug("Ignoring finalization failure", step=description, error=str(e))

    @abstractmethod
    def _begin(self) -> None:
        ...

    @abstractmethod
    def _add(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def _add_array(self, key: str, element_key: str, values: Optional[Sequence[Any]]) -> None:
        ...

    @abstractmethod
    def _add_map(self, key: str, values: Optional[Mapping[str, Any]]) -> None:
        ...

    @abstractmethod
    def _add_stack_trace(self, thrown: ThrownInfo) -> None:
        ...

    @abstractmethod
    def _build(self) -> str:
        ...
