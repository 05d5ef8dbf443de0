"""Prize wheel mode - scripted two-spin reward flow.

Flow:
1. Idle: wheel at rest, waiting for SPIN
2. First spin: lands on the no-win sector, "Try Again!"
3. Second spin: lands on the reward sector, waits for CLAIM
4. Claim: wheel resets to rotation zero for the next visitor

Every spin and every claim also fires the promotional action.
"""

from typing import Optional
import logging

from prizewheel.animation.animator import RotationAnimation
from prizewheel.core.events import Event, EventType
from prizewheel.core.state import State, SpinStep, StateMachine, WheelContext
from prizewheel.modes.base import BaseMode, ModeContext
from prizewheel.utils.promotion import invoke_promotion

logger = logging.getLogger(__name__)

ANIMATION_NAME = "wheel_spin"

READY_MESSAGE = "Click SPIN to play!"
FIRST_SPIN_MESSAGE = "Spinning... First spin: {label}"
SECOND_SPIN_MESSAGE = "Spinning... You will win {label}"
TRY_AGAIN_MESSAGE = "Try Again!"
PLAY_AGAIN_MESSAGE = "Click SPIN to play again!"
AD_WINDOW_NOTICE = "Please do not close the ad window"


class PrizeWheelMode(BaseMode):
    """Spin orchestrator.

    States (see ``StateMachine.VALID_TRANSITIONS``):
        IDLE --spin--> SPINNING --first result--> IDLE
        SPINNING --second result--> AWAITING_CLAIM --claim--> IDLE

    The ``spinning`` flag in the context is the only re-entrancy guard: it
    is set when a spin starts and cleared after the "try again" reveal or
    after the claim.
    """

    name = "prize_wheel"

    def __init__(self, context: ModeContext):
        super().__init__(context)

        self._target_rotation: Optional[float] = None
        self._animation: Optional[RotationAnimation] = None
        self._frames_rendered = 0
        self._snaps = 0

    # Shortcuts
    @property
    def state_machine(self) -> StateMachine:
        return self.context.state_machine

    @property
    def wheel_state(self) -> WheelContext:
        return self.context.state_machine.context

    @property
    def rotation(self) -> float:
        return self.wheel_state.rotation

    @property
    def message(self) -> str:
        return self.wheel_state.message

    @property
    def detail(self) -> str:
        return self.wheel_state.detail

    @property
    def can_spin(self) -> bool:
        """Whether the spin trigger is enabled."""
        return not self.wheel_state.spinning

    @property
    def can_claim(self) -> bool:
        return self.state_machine.state == State.AWAITING_CLAIM

    @property
    def frames_rendered(self) -> int:
        return self._frames_rendered

    @property
    def snap_count(self) -> int:
        """Corrective snaps applied after a spin landed off target."""
        return self._snaps

    # Lifecycle
    def on_enter(self) -> None:
        if not self.wheel_state.message:
            self.state_machine.update_context(message=READY_MESSAGE)
        self._render_wheel()
        logger.info("Prize wheel ready")

    def on_update(self, delta_ms: float) -> None:
        # Frames come from the animator; nothing time-based lives here
        pass

    def on_input(self, event: Event) -> bool:
        if event.type == EventType.BUTTON_PRESS:
            return self.spin()
        if event.type == EventType.CLAIM_PRESS:
            return self.claim()
        return False

    def on_exit(self) -> None:
        self._animation = None

    # Spin flow
    def spin(self) -> bool:
        """Start a spin toward the scripted sector.

        Returns:
            False if a spin or reveal is already in progress
        """
        ctx = self.wheel_state
        if ctx.spinning:
            logger.debug("Spin ignored: wheel already spinning")
            return False

        geometry = self.context.geometry
        wheel = self.context.wheel
        step = ctx.spin_step
        if step == SpinStep.FIRST:
            label, template = wheel.no_win_label, FIRST_SPIN_MESSAGE
        else:
            label, template = wheel.reward_label, SECOND_SPIN_MESSAGE
        target_index = geometry.index_of(label)

        if not self.state_machine.transition(
            State.SPINNING,
            spinning=True,
            result_index=None,
            message=template.format(label=label),
            detail=AD_WINDOW_NOTICE,
        ):
            return False

        invoke_promotion(self.context.promotion)

        start = ctx.rotation
        turns = geometry.forward_turns(start, wheel.extra_full_turns)
        self._target_rotation = geometry.target_rotation_for(target_index, turns)

        self.state_machine.update_context(
            target_index=target_index,
            spins_total=ctx.spins_total + 1,
        )

        self._animation = self.context.animator.animate(
            start,
            self._target_rotation,
            wheel.spin_duration_ms,
            self._on_frame,
            name=ANIMATION_NAME,
        )
        self._animation.add_done_callback(self._on_spin_complete)

        logger.info(
            f"Spin {ctx.spins_total} ({step.name}): target {label!r} "
            f"[{target_index}] at {self._target_rotation:.3f} rad, {turns} turns"
        )
        self.emit_event(EventType.SPIN_STARTED, {
            "step": step.name,
            "target_index": target_index,
            "target_rotation": self._target_rotation,
        })
        return True

    def _on_frame(self, rotation: float) -> None:
        self.state_machine.update_context(rotation=rotation)
        self._render_wheel()

    def _on_spin_complete(self, animation: RotationAnimation) -> None:
        ctx = self.wheel_state
        geometry = self.context.geometry
        target_index = ctx.target_index

        actual = geometry.sector_at(ctx.rotation)
        if actual != target_index:
            # Single snap to the closed-form target, no second check
            logger.warning(
                f"Wheel landed on sector {actual}, expected {target_index}; snapping"
            )
            self._snaps += 1
            self.state_machine.update_context(rotation=self._target_rotation)
            self._render_wheel()
            actual = target_index

        label = geometry.sectors[actual].label
        self._animation = None

        if ctx.spin_step == SpinStep.FIRST:
            self.state_machine.transition(
                State.IDLE,
                result_index=actual,
                spin_step=SpinStep.SECOND,
                spinning=False,
                message=TRY_AGAIN_MESSAGE,
                detail=AD_WINDOW_NOTICE,
            )
        else:
            self.state_machine.transition(
                State.AWAITING_CLAIM,
                result_index=actual,
                message=f"You won {label}!",
                detail=AD_WINDOW_NOTICE,
            )

        logger.info(f"Spin complete: landed on {label!r} after {animation.frames} frames")
        self.emit_event(EventType.SPIN_COMPLETE, {
            "result_index": actual,
            "label": label,
            "state": self.state_machine.state.name,
        })

    def claim(self) -> bool:
        """Claim the revealed reward and reset the wheel.

        Returns:
            False unless a reward is waiting to be claimed
        """
        if self.state_machine.state != State.AWAITING_CLAIM:
            logger.debug(f"Claim ignored in state {self.state_machine.state.name}")
            return False

        invoke_promotion(self.context.promotion)

        reward = self.context.wheel.reward_label
        self.state_machine.update_context(rotation=0.0)
        self._render_wheel()
        self.state_machine.transition(
            State.IDLE,
            spin_step=SpinStep.FIRST,
            spinning=False,
            target_index=None,
            result_index=None,
            message=PLAY_AGAIN_MESSAGE,
            detail="",
        )

        logger.info(f"Reward claimed: {reward}")
        self.emit_event(EventType.REWARD_CLAIMED, {"label": reward})
        return True

    # Rendering
    def _render_wheel(self) -> None:
        surface = self.context.surface
        buffer = surface.get_buffer()
        self.context.renderer.render(buffer, self.rotation)
        surface.set_buffer(buffer)
        self._frames_rendered += 1

