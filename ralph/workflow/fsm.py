"""Loop state machine using transitions library.

Optional ordering guard for the driver loop. When STRICT_ORDER=true the
orchestrator walks this machine and refuses calls made out of sequence:

    idle --found_work--> has_work --issue_prompt--> prompt_issued
    prompt_issued --story_completed--> idle
    idle/has_work/prompt_issued --all_complete--> done
    done --reopen--> idle          (stories added or reset by hand)

State is persisted to a one-line file (.ralph-state) after every change so
separate process invocations see the same machine.

Usage:
    fsm = LoopFSM(state_path)
    fsm.found_work()
    fsm.issue_prompt()
    fsm.story_completed()
"""

import logging
from pathlib import Path
from typing import Callable

from transitions import Machine

from ralph.lib.atomic import atomic_write_text

logger = logging.getLogger(__name__)


STATES = ["idle", "has_work", "prompt_issued", "done"]

TRANSITIONS = [
    {"trigger": "found_work", "source": "idle", "dest": "has_work"},

    # Re-issuing the prompt for the same story is allowed
    {"trigger": "issue_prompt", "source": "has_work", "dest": "prompt_issued"},
    {"trigger": "issue_prompt", "source": "prompt_issued", "dest": "prompt_issued"},

    {"trigger": "story_completed", "source": "prompt_issued", "dest": "idle"},

    {"trigger": "all_complete", "source": "idle", "dest": "done"},
    {"trigger": "all_complete", "source": "has_work", "dest": "done"},
    {"trigger": "all_complete", "source": "prompt_issued", "dest": "done"},

    {"trigger": "reopen", "source": "done", "dest": "idle"},
]


class OutOfOrderError(Exception):
    """Raised when a loop operation is called in the wrong state."""

    def __init__(self, operation: str, state: str, expected: list[str]):
        self.operation = operation
        self.state = state
        self.expected = expected
        super().__init__(
            f"'{operation}' not allowed in state '{state}' "
            f"(expected one of: {', '.join(expected)})"
        )


class LoopFSM:
    """State machine for one project's driver loop.

    Wraps the transitions library with loop-specific logic:
    - Loads initial state from the state file
    - Persists state changes back to it
    - Logs all transitions
    """

    def __init__(self, state_path: Path, on_transition: Callable[[str, str, str], None] | None = None):
        """Initialize FSM from the persisted state.

        Args:
            state_path: Path to the state file
            on_transition: Optional callback(from_state, to_state, trigger)
        """
        self.state_path = state_path
        self.on_transition = on_transition

        initial = self._load_state()
        if initial not in STATES:
            logger.warning(f"[FSM] Unknown state '{initial}' in {state_path}, defaulting to 'idle'")
            initial = "idle"

        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial=initial,
            auto_transitions=False,
            send_event=True,
            after_state_change="on_state_change",
        )

    def _load_state(self) -> str:
        if not self.state_path.exists():
            return "idle"
        return self.state_path.read_text(encoding="utf-8").strip() or "idle"

    def _save_state(self) -> None:
        atomic_write_text(self.state_path, self.state + "\n")

    def on_state_change(self, event) -> None:
        """Persist and log after any transition."""
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name

        logger.info(f"[FSM] {from_state} -> {to_state} ({trigger})")
        self._save_state()

        if self.on_transition:
            self.on_transition(from_state, to_state, trigger)

    def can(self, trigger: str) -> bool:
        """Check if a trigger can be executed in current state."""
        return trigger in self.machine.get_triggers(self.state)

    def require(self, operation: str, *states: str) -> None:
        """Raise OutOfOrderError unless the machine is in one of `states`."""
        if self.state not in states:
            raise OutOfOrderError(operation, self.state, list(states))

    def sync(self, has_work: bool) -> None:
        """Bring the machine in line with what the PRD says.

        Called by the done-check, which is always allowed.
        """
        if not has_work:
            if self.state != "done":
                self.all_complete()
            return
        if self.state == "done":
            self.reopen()
        if self.state == "idle":
            self.found_work()


def reset_fsm(state_path: Path) -> None:
    """Forget loop state (used when a new unit of work starts)."""
    if state_path.exists():
        state_path.unlink()
        logger.info(f"[FSM] Cleared loop state {state_path}")
