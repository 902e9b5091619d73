"""Deposit Status State Machine Guard.

Uses python-statemachine to check, before a transaction is simulated, that
the deposit's on-chain status allows the action. The contract remains the
authority; this guard only rejects calls that would certainly revert.

The state machine is instantiated per call from the status just read from
the contract, never cached.

Transition table:
    PENDING    -> SUBMITTED   (submit)
    SUBMITTED  -> APPROVED    (approve)
    APPROVED   -> APPROVED    (approve, follow-up approvals)

Claim, withdraw and refill do not change the recorded status and are not
guarded here.
"""

from __future__ import annotations

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from escrow_client.domain.enums import DepositStatus
from escrow_client.domain.exceptions import InvalidStateTransitionError


class DepositStateMachine(StateMachine):
    """State machine that guards deposit status transitions.

    Usage:
        sm = DepositStateMachine(current_status="PENDING")
        sm.submit()          # transitions to SUBMITTED
        sm.status            # "SUBMITTED"
    """

    # --- States ---
    PENDING = State("PENDING", initial=True)
    SUBMITTED = State("SUBMITTED")
    APPROVED = State("APPROVED")

    # --- Events / Transitions ---
    submit = PENDING.to(SUBMITTED)
    approve = SUBMITTED.to(APPROVED) | APPROVED.to.itself()

    def __init__(self, current_status: str = "PENDING") -> None:
        """Initialize the state machine at a given status.

        Args:
            current_status: A DepositStatus name (e.g., "SUBMITTED").
        """
        valid_values = {s.value for s in self.states}
        if current_status not in valid_values:
            valid = ", ".join(sorted(valid_values))
            raise ValueError(
                f"Unknown status '{current_status}'. Valid states: {valid}"
            )
        super().__init__(start_value=current_status)

    @property
    def status(self) -> str:
        """Return the current state value as a string (matches DepositStatus names)."""
        return str(self.current_state.value)

    def get_allowed_events(self) -> list[str]:
        """Return a list of event names that can fire from the current state."""
        return [_event_key(event) for event in self.allowed_events]


def _event_key(event) -> str:
    # Newer releases keep the attribute name in ``id`` and a humanized ``name``
    return getattr(event, "id", None) or event.name


GUARDED_EVENTS = frozenset({"submit", "approve"})


def validate_transition(current_status: DepositStatus | str, event_name: str) -> DepositStatus:
    """Validate a status transition and return the resulting status.

    Args:
        current_status: Current DepositStatus (member or name).
        event_name: The event to fire ("submit" or "approve").

    Returns:
        The DepositStatus after the transition.

    Raises:
        InvalidStateTransitionError: If the transition is illegal.
        ValueError: If the status or event name is unknown.
    """
    status_name = (
        current_status.name if isinstance(current_status, DepositStatus) else current_status
    )
    sm = DepositStateMachine(current_status=status_name)

    if event_name not in GUARDED_EVENTS:
        raise ValueError(
            f"Unknown event '{event_name}'. "
            f"Allowed events from {status_name}: {sm.get_allowed_events()}"
        )

    try:
        getattr(sm, event_name)()
    except TransitionNotAllowed as exc:
        raise InvalidStateTransitionError(status_name, event_name) from exc
    return DepositStatus[sm.status]
