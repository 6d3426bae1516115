"""Generic table-driven finite state machine.

The machine holds exactly one current state and moves only when
``process_event`` finds a registered ``(state, event)`` mapping. Listeners
run synchronously, in registration order, before ``process_event`` returns.
"""

from typing import Callable, Generic, Hashable, TypeVar

S = TypeVar("S", bound=Hashable)
E = TypeVar("E", bound=Hashable)

# (old_state, new_state, event)
StateChangeListener = Callable[[S, S, E], None]


class StateMachine(Generic[S, E]):
    """Deterministic state machine keyed by (state, event) -> state."""

    def __init__(self, initial_state: S):
        self._initial_state: S = initial_state
        self._current_state: S = initial_state
        self._final_states: set[S] = set()
        self._transitions: dict[S, dict[E, S]] = {}
        self._listeners: list[StateChangeListener] = []

    @property
    def current_state(self) -> S:
        return self._current_state

    @property
    def initial_state(self) -> S:
        return self._initial_state

    @property
    def final_states(self) -> frozenset[S]:
        return frozenset(self._final_states)

    def get_current_state(self) -> S:
        return self._current_state

    def add_transition(self, from_state: S, event: E, to_state: S) -> "StateMachine[S, E]":
        """Register a transition. An existing mapping for the pair is replaced."""
        self._transitions.setdefault(from_state, {})[event] = to_state
        return self

    def add_final_state(self, state: S) -> "StateMachine[S, E]":
        """Mark a state as terminal. Advisory only, transitions out still work."""
        self._final_states.add(state)
        return self

    def is_in_final_state(self) -> bool:
        return self._current_state in self._final_states

    def add_state_change_listener(self, listener: StateChangeListener) -> None:
        self._listeners.append(listener)

    def has_transition(self, state: S, event: E) -> bool:
        return event in self._transitions.get(state, {})

    def available_events(self, state: S | None = None) -> list[E]:
        """Events with a registered transition out of *state* (default: current)."""
        source = self._current_state if state is None else state
        return list(self._transitions.get(source, {}))

    def process_event(self, event: E) -> bool:
        """Apply *event* to the current state.

        Returns False and leaves everything untouched when no transition is
        registered. Otherwise moves to the mapped state, notifies listeners
        with ``(old_state, new_state, event)`` and returns True. Listener
        exceptions are not caught.
        """
        mapping = self._transitions.get(self._current_state)
        if mapping is None or event not in mapping:
            return False

        old_state = self._current_state
        self._current_state = mapping[event]

        for listener in self._listeners:
            listener(old_state, self._current_state, event)

        return True

    def reset(self) -> None:
        """Return to the initial state without notifying listeners."""
        self._current_state = self._initial_state

    def __repr__(self) -> str:
        transitions = {
            source: dict(targets) for source, targets in self._transitions.items()
        }
        return (
            f"StateMachine(current_state={self._current_state!r}, "
            f"initial_state={self._initial_state!r}, "
            f"final_states={sorted(self._final_states, key=str)!r}, "
            f"transitions={transitions!r})"
        )
