"""
InputRegistry - Decoded input events to view handlers

Bounded Context: Routing decoded gestures (UI glue, replay files) to the map view

Each input name is bound to a handler and the payload fields it cannot do
without. Unknown names and incomplete payloads are rejected before the
handler runs, so a malformed replay line never half-applies.

Threading: register() takes a lock; execute() only reads.
"""

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Set, Tuple

InputHandler = Callable[[Mapping[str, Any]], Any]


class InputNotAvailableError(Exception):
    """Raised when an event names an unregistered input"""
    pass


class InputPayloadError(ValueError):
    """Raised when an event lacks a field its input requires"""
    pass


@dataclass(frozen=True)
class InputBinding:
    handler: InputHandler
    required: Tuple[str, ...] = ()


class InputRegistry:
    """
    Input name -> (handler, required payload fields).

    Example:
        registry = InputRegistry()
        registry.register('scroll', lambda e: view.scroll(e['dx'], e['dy']), required=('dx', 'dy'))

        registry.execute('scroll', {'input': 'scroll', 'dx': 10.0, 'dy': 0.0})
    """

    def __init__(self):
        self._bindings: Dict[str, InputBinding] = {}
        self._lock = threading.Lock()

    def register(self, name: str, handler: InputHandler, required: Tuple[str, ...] = ()) -> None:
        """
        Bind an input name to its handler.

        Raises:
            ValueError: If the name is already bound
        """
        with self._lock:
            if name in self._bindings:
                raise ValueError(f"Input '{name}' already registered")
            self._bindings[name] = InputBinding(handler, tuple(required))

    def execute(self, name: str, event: Mapping[str, Any]) -> Any:
        """
        Validate an event against its binding and run the handler.

        Returns:
            Whatever the handler returns (the hit feature for "tap")

        Raises:
            InputNotAvailableError: If the name is not registered
            InputPayloadError: If required fields are missing
        """
        binding = self._bindings.get(name)
        if binding is None:
            raise InputNotAvailableError(
                f"Input '{name}' not available. "
                f"Available inputs: {', '.join(sorted(self.available_inputs))}"
            )

        missing = [key for key in binding.required if key not in event]
        if missing:
            raise InputPayloadError(f"Input '{name}' missing fields: {', '.join(missing)}")

        return binding.handler(event)

    @property
    def available_inputs(self) -> Set[str]:
        """Snapshot of all registered input names."""
        return set(self._bindings.keys())
