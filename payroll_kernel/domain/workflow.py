"""
Canonical workflow types (``payroll_kernel.domain.workflow``).

Responsibility
--------------
Pure value objects for small label state machines such as the payroll
record status.  A ``Workflow`` only answers "is this move allowed?";
it never performs the move.

Architecture position
---------------------
**Kernel domain layer** -- pure value objects.  ZERO I/O.

Invariants enforced
-------------------
* Transitions reference only states in ``Workflow.states``.
* ``initial_state`` is a member of ``states``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Transition:
    """A valid state transition in a workflow."""
    from_state: str
    to_state: str
    action: str


@dataclass(frozen=True)
class Workflow:
    """A state machine definition for a record lifecycle.

    Contract: frozen; ``transitions`` reference only states in ``states``.
    Guarantees: ``initial_state`` is a member of ``states``.
    """
    name: str
    description: str
    initial_state: str
    states: tuple[str, ...]
    transitions: tuple[Transition, ...]

    def __post_init__(self) -> None:
        if self.initial_state not in self.states:
            raise ValueError(
                f"initial_state '{self.initial_state}' is not one of {self.states}"
            )
        for transition in self.transitions:
            for state in (transition.from_state, transition.to_state):
                if state not in self.states:
                    raise ValueError(
                        f"Transition '{transition.action}' references unknown "
                        f"state '{state}' in workflow '{self.name}'"
                    )

    def find_transition(self, from_state: str, to_state: str) -> Transition | None:
        """Return the transition between two states, or None if not allowed."""
        for transition in self.transitions:
            if transition.from_state == from_state and transition.to_state == to_state:
                return transition
        return None

    def allowed_targets(self, from_state: str) -> tuple[str, ...]:
        """States reachable from ``from_state`` in one step."""
        return tuple(
            t.to_state for t in self.transitions if t.from_state == from_state
        )
